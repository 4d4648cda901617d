# apps/core/views.py

import json
from django.http import JsonResponse
from django.middleware.csrf import get_token
from django.views.decorators.csrf import csrf_exempt, ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST

from .auth_service import identity_service  # Importando nosso serviço encapsulado


def _ler_credenciais(request):
    """Extrai email/senha do corpo JSON (ou form-encoded)"""
    if request.content_type == 'application/json':
        try:
            dados = json.loads(request.body or b'{}')
        except json.JSONDecodeError:
            return None, None
        if not isinstance(dados, dict):
            return None, None
    else:
        dados = request.POST
    return dados.get('email'), dados.get('password')


@csrf_exempt  # Chamado pelo frontend em outra origem
@require_POST
def sign_up_view(request):
    """
    Cadastro de conta

    O encapsulamento aqui separa a lógica HTTP (view) da lógica de identidade (service)
    """
    email, password = _ler_credenciais(request)
    sucesso, mensagem, usuario = identity_service.sign_up(email, password)

    if not sucesso:
        return JsonResponse({'error': mensagem}, status=400)

    return JsonResponse({'message': mensagem, 'user': usuario}, status=201)


@require_POST
def sign_in_view(request):
    """
    Login: abre a sessão e devolve o usuário (id usado em register:user)

    Protegido por CSRF porque chama login(); o token vem de csrf_token_view.
    """
    email, password = _ler_credenciais(request)
    sucesso, mensagem, usuario = identity_service.sign_in(request, email, password)

    if not sucesso:
        return JsonResponse({'error': mensagem}, status=401)

    return JsonResponse({'message': mensagem, 'user': usuario})


@require_GET
@ensure_csrf_cookie
def csrf_token_view(request):
    """Entrega o token CSRF exigido pelo login"""
    return JsonResponse({'csrfToken': get_token(request)})


@csrf_exempt
@require_POST
def sign_out_view(request):
    identity_service.sign_out(request)
    return JsonResponse({'message': 'Signed out'})


@require_GET
def current_user_view(request):
    """Restaura a sessão: usuário atual ou null"""
    return JsonResponse({'user': identity_service.get_current_user(request)})
