# apps/board/views.py

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from .routing import task_relay


@require_GET
def relay_status(request):
    """
    Estado do relay em memória (usuários conectados e tarefas guardadas)
    """
    return JsonResponse({
        'status': 'ok',
        'users_online': len(task_relay.registry.users()),
        'tasks': len(task_relay.store),
        'timestamp': timezone.now().isoformat(),
    })
