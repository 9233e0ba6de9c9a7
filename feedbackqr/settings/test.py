"""
Test settings for FeedbackQR project.
"""
# Heredamos de 'base', NO de 'production' (sin Sentry ni SSL forzado).
from .base import *  # noqa: F401,F403

# ============================================================
# CONFIGURACIÓN BÁSICA PARA TESTS
# ============================================================
DEBUG = False
SECRET_KEY = 'test-secret-key-insecure-but-fast'
ALLOWED_HOSTS = ['testserver', 'localhost', '127.0.0.1']
TIME_ZONE = 'UTC'

SECURE_SSL_REDIRECT = False
SECURE_HSTS_SECONDS = 0
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

# ============================================================
# CACHE (Memoria RAM, usada por django-ratelimit)
# ============================================================
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'unique-snowflake',
    }
}

# ============================================================
# BASE DE DATOS (SQLite en memoria)
# ============================================================
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# ============================================================
# LOGGING (Silencioso para no ensuciar la consola)
# ============================================================
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['null'],
            'level': 'CRITICAL',
        },
        'core': {
            'handlers': ['null'],
            'level': 'CRITICAL',
        },
        'surveys': {
            'handlers': ['null'],
            'level': 'CRITICAL',
        },
    },
}
