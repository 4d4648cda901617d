# apps/board/management/commands/runrelay.py

from daphne.cli import CommandLineInterface
from django.conf import settings
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = 'Inicia o relay WebSocket de tarefas (daphne) na porta configurada'

    def add_arguments(self, parser):
        parser.add_argument('--host', default='0.0.0.0', help='Endereço de bind')
        parser.add_argument('--port', type=int, default=None, help='Porta (padrão: PORT do ambiente)')

    def handle(self, *args, **options):
        """
        Sobe o servidor ASGI com HTTP e WebSocket no mesmo processo

        O estado do relay é local ao processo: rodar apenas uma instância.
        """
        port = options['port'] or settings.RELAY_PORT
        host = options['host']

        self.stdout.write(f'🚀 Relay WebSocket em ws://{host}:{port}/ws/tasks/')
        self.stdout.write(f'🌐 Origens permitidas: {", ".join(settings.RELAY_ALLOWED_ORIGINS) or "(nenhuma)"}')

        CommandLineInterface().run([
            '--bind', host,
            '--port', str(port),
            settings.ASGI_APPLICATION.replace('.application', ':application'),
        ])
