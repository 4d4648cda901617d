# apps/board/routing.py

from django.conf import settings
from django.urls import re_path

from . import consumers
from .relay import TaskRelay

# Instância única do relay no processo: dona das tarefas e das conexões
task_relay = TaskRelay(
    enforce_update_ownership=settings.RELAY_ENFORCE_UPDATE_OWNERSHIP,
)

# Rotas WebSocket para a aplicação board
websocket_urlpatterns = [
    # Sincronização de tarefas por usuário - atualizações em tempo real
    re_path(r'^ws/tasks/$', consumers.TaskSyncConsumer.as_asgi(relay=task_relay)),
]
