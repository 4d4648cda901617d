# config/settings/test.py

"""
Configurações para a suíte de testes: banco em memória, channel layer em memória
"""

from .base import *

DEBUG = False

SECRET_KEY = 'test-secret-key-not-for-production'

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

# Hash rápido para os testes de autenticação
PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}

RELAY_ALLOWED_ORIGINS = ['http://localhost:5173']
RELAY_ENFORCE_UPDATE_OWNERSHIP = True
