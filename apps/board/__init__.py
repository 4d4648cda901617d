# apps/board/__init__.py

"""
Board - Relay de sincronização de tarefas em tempo real

Funcionalidades:
- WebSocket por aba, registrado sob a identidade do usuário
- Comandos de criação, edição, movimentação e remoção de tarefas
- Reenvio da lista completa para todas as conexões do usuário
- Repositório persistente opcional e sessão do cliente (projeções de exibição)
"""
