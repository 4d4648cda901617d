# apps/__init__.py

"""
Kanban Relay - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Identidade (cadastro, login, sessão)
- board: Relay WebSocket de tarefas, repositório persistente e sessão do cliente
"""

__version__ = '0.1.0'
