# apps/core/auth_service.py

"""
Serviço de Identidade - sign-up, sign-in, sign-out e usuário atual

O relay confia no id enviado em register:user; este serviço é de onde o
cliente obtém esse id. O email é usado como username do django.contrib.auth.
"""

import logging
from typing import Dict, Optional, Tuple

from django.contrib.auth import authenticate, get_user_model, login, logout
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.validators import validate_email

logger = logging.getLogger(__name__)
User = get_user_model()


def user_to_dict(usuario) -> Dict[str, str]:
    """Objeto de usuário exposto ao cliente"""
    return {'id': str(usuario.pk), 'email': usuario.email}


class IdentityService:
    """
    Serviço encapsulado de identidade

    Falhas nunca levantam exceção: retornam (False, mensagem, None) para o
    formulário exibir a mensagem.
    """

    def sign_up(self, email: str, password: str) -> Tuple[bool, str, Optional[Dict]]:
        """
        Cria conta nova

        Returns:
            Tuple[sucesso, mensagem, usuario]
        """
        email = self._normalizar_email(email)

        erro = self._validar_credenciais(email, password)
        if erro:
            return False, erro, None

        if self._usuario_existe(email):
            return False, "User already registered", None

        usuario = User.objects.create_user(username=email, email=email, password=password)
        logger.info(f"👤 Conta criada: {email}")
        return True, "Sign up successful!", user_to_dict(usuario)

    def sign_in(self, request, email: str, password: str) -> Tuple[bool, str, Optional[Dict]]:
        """
        Autentica e abre a sessão

        Returns:
            Tuple[sucesso, mensagem, usuario]
        """
        email = self._normalizar_email(email)
        if not email or not password:
            return False, "Email and password are required", None

        usuario = authenticate(request, username=email, password=password)
        if usuario is None:
            logger.warning(f"⚠️ Tentativa de login falhada para: {email}")
            return False, "Invalid login credentials", None

        login(request, usuario)
        return True, f"Welcome, {usuario.email}!", user_to_dict(usuario)

    def sign_out(self, request) -> bool:
        """Realiza logout"""
        logout(request)
        return True

    def get_current_user(self, request) -> Optional[Dict]:
        usuario = getattr(request, 'user', None)
        if usuario is None or not usuario.is_authenticated:
            return None
        return user_to_dict(usuario)

    # =================== MÉTODOS PRIVADOS ===================

    def _normalizar_email(self, email: Optional[str]) -> str:
        return (email or '').strip().lower()

    def _validar_credenciais(self, email: str, password: str) -> Optional[str]:
        try:
            validate_email(email)
        except ValidationError:
            return "Invalid email address"

        try:
            validate_password(password or '')
        except ValidationError as e:
            return " ".join(e.messages)

        return None

    def _usuario_existe(self, email: str) -> bool:
        return User.objects.filter(username=email).exists() or User.objects.filter(email=email).exists()


# Instância global do serviço (Singleton pattern)
identity_service = IdentityService()
