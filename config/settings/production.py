# config/settings/production.py

import logging

import dj_database_url
from .base import *

# === PRODUÇÃO ===

DEBUG = False

# Hosts permitidos (obrigatório definir)
ALLOWED_HOSTS = env('ALLOWED_HOSTS', default=['localhost'])

# === SEGURANÇA ===

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

# Cookies seguros
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True

# Outros cabeçalhos de segurança
X_FRAME_OPTIONS = 'DENY'

# === BANCO DE DADOS ===

# Usar DATABASE_URL em produção (Heroku, Railway, etc)
if env('DATABASE_URL', default=None):
    DATABASES['default'] = dj_database_url.parse(
        env('DATABASE_URL'),
        conn_max_age=600,
        conn_health_checks=True,
    )

# === CACHE ===

# Redis quando disponível (sessões compartilhadas)
if env('REDIS_URL', default=None):
    CACHES['default'] = {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': env('REDIS_URL'),
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
        }
    }

    # Cache para sessões
    SESSION_ENGINE = 'django.contrib.sessions.backends.cache'
    SESSION_CACHE_ALIAS = 'default'

# === LOGGING ===

LOGGING['handlers']['console']['formatter'] = 'verbose'

# Logging para Sentry (se configurado)
if env('SENTRY_DSN', default=None):
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    sentry_logging = LoggingIntegration(
        level=logging.INFO,
        event_level=logging.ERROR
    )

    sentry_sdk.init(
        dsn=env('SENTRY_DSN'),
        integrations=[
            DjangoIntegration(),
            sentry_logging,
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,
        environment=env('ENVIRONMENT', default='production')
    )

# === VALIDAÇÕES ===

# Verificar variáveis obrigatórias
required_settings = ['SECRET_KEY']

for setting in required_settings:
    if not env(setting, default=None):
        raise ValueError(f"Variável de ambiente {setting} é obrigatória em produção")
