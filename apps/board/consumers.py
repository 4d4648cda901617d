# apps/board/consumers.py

import json
import logging
from channels.exceptions import ChannelFull
from channels.generic.websocket import AsyncWebsocketConsumer
from django.utils import timezone

from .commands import MalformedCommand, Ping, PONG, SYNC_TASKS, parse_command

logger = logging.getLogger(__name__)


class TaskSyncConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket do relay de tarefas

    Funcionalidades:
    - Registro da conexão sob a identidade do usuário (register:user)
    - Comandos de criação, edição, movimentação e remoção de tarefas
    - Entrega de sync:tasks para todas as abas do mesmo usuário
    - Heartbeat (ping/pong)
    """

    relay = None

    def __init__(self, *args, relay=None, **kwargs):
        super().__init__(*args, **kwargs)
        if relay is None:
            raise ValueError("TaskSyncConsumer exige a instância do relay (as_asgi(relay=...))")
        self.relay = relay

    async def connect(self):
        """
        Aceita a conexão; a identidade só é conhecida após register:user
        """
        await self.accept()
        logger.info(f"✅ WebSocket conectado - {self.channel_name}")

    async def disconnect(self, close_code):
        """
        Remove a conexão do registro do usuário
        """
        self.relay.disconnect(self.channel_name)
        logger.info(f"🔌 WebSocket desconectado - {self.channel_name} (code={close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        """
        Recebe frames do cliente e despacha para o relay
        """
        if text_data is None:
            logger.warning(f"⚠️ Frame binário ignorado de {self.channel_name}")
            return

        try:
            message = json.loads(text_data)
        except (ValueError, RecursionError):
            # RecursionError: aninhamento profundo demais para o decoder
            logger.error(f"❌ JSON inválido recebido via WebSocket de {self.channel_name}")
            return

        try:
            command = parse_command(message)
        except MalformedCommand as e:
            logger.warning(f"⚠️ Comando inválido de {self.channel_name}: {e}")
            return

        # Heartbeat/Ping
        if isinstance(command, Ping):
            await self.send(text_data=json.dumps({
                'type': PONG,
                'timestamp': self.get_timestamp()
            }))
            return

        # Mutação síncrona; os envios só acontecem depois
        pushes = self.relay.handle(self.channel_name, command)

        for push in pushes:
            try:
                await self.channel_layer.send(push.connection, {
                    'type': 'sync.tasks',
                    'tasks': push.tasks,
                })
            except ChannelFull:
                # Conexão que não consome mais mensagens; as demais seguem recebendo
                logger.warning(f"⚠️ Fila cheia para {push.connection} - sync:tasks descartado")

    # === Handlers para eventos do channel layer ===

    async def sync_tasks(self, event):
        """
        Entrega a lista completa de tarefas do usuário
        """
        await self.send(text_data=json.dumps({
            'type': SYNC_TASKS,
            'data': event['tasks']
        }))

    # === Métodos auxiliares ===

    def get_timestamp(self):
        """
        Retorna timestamp atual em formato ISO
        """
        return timezone.now().isoformat()
