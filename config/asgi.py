# config/asgi.py

import os
from django.core.asgi import get_asgi_application

# Configurar Django settings
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

# Importar URLs de WebSocket depois de configurar Django
django_asgi_app = get_asgi_application()

from django.conf import settings  # noqa: E402
from channels.auth import AuthMiddlewareStack  # noqa: E402
from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from channels.security.websocket import OriginValidator  # noqa: E402

from apps.board.routing import websocket_urlpatterns  # noqa: E402

# Configuração ASGI
application = ProtocolTypeRouter({
    # HTTP tradicional
    "http": django_asgi_app,

    # WebSocket restrito às origens permitidas
    "websocket": OriginValidator(
        AuthMiddlewareStack(
            URLRouter(websocket_urlpatterns)
        ),
        settings.RELAY_ALLOWED_ORIGINS,
    ),
})
