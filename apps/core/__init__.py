# apps/core/__init__.py

"""
Core - Identidade dos usuários do relay

Contém:
- Serviço de identidade (sign-up, sign-in, sign-out, usuário atual)
- Endpoints JSON consumidos pelo frontend
"""
