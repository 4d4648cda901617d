# config/settings/development.py

from .base import *

# === DESENVOLVIMENTO ===

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# === BANCO DE DADOS ===

# SQLite por padrão; DATABASE_URL (lida em base.py) tem precedência
if env('DATABASE_URL', default=None):
    import dj_database_url

    DATABASES['default'] = dj_database_url.parse(env('DATABASE_URL'), conn_max_age=600)

# === LOGGING MAIS VERBOSO ===

LOGGING['handlers']['console']['level'] = 'DEBUG'
LOGGING['root']['level'] = 'DEBUG'
LOGGING['loggers']['apps']['level'] = 'DEBUG'

# === CONFIGURAÇÕES DE DESENVOLVIMENTO ===

# Arquivos estáticos sem manifest em desenvolvimento
STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}

# Configurações mais relaxadas para desenvolvimento
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False
