from .base import *  # noqa: F401,F403
from decouple import config

# ============================================================
# CONFIGURACIÓN LOCAL
# ============================================================

DEBUG = True

SECRET_KEY = config('SECRET_KEY', default='dev-secret-key-not-for-production')

LOCAL_LAN_IP = config('LAN_IP', default='172.16.0.2')

ALLOWED_HOSTS = ['localhost', '127.0.0.1', LOCAL_LAN_IP]

# ============================================================
# MIDDLEWARE (con logging de requests)
# ============================================================
MIDDLEWARE = ['core.middleware_logging.RequestLoggingMiddleware'] + MIDDLEWARE

# Deshabilitar HTTPS en desarrollo - runserver solo soporta HTTP
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False
SECURE_SSL_REDIRECT = False

CSRF_TRUSTED_ORIGINS = [
    'http://127.0.0.1:8000',
    'http://localhost:8000',
    f'http://{LOCAL_LAN_IP}:8000',
]

# ============================================================
# BASE DE DATOS
# ============================================================
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': config('DB_NAME', default='feedbackqr_dev'),
        'USER': config('DB_USER', default='feedbackqr_user'),
        'PASSWORD': config('DB_PASSWORD', default=''),
        'HOST': config('DB_HOST', default='127.0.0.1'),
        'PORT': config('DB_PORT', default='5432'),
        'OPTIONS': {
            'client_encoding': 'UTF8',
        },
        'CONN_MAX_AGE': 600,
    }
}

# Las agregaciones se registran en DEBUG en desarrollo
LOGGING['loggers']['core.performance']['level'] = 'DEBUG'
