"""
Django settings for feedbackqr project.
Configuración compartida por todos los entornos.
"""

from pathlib import Path
from decouple import config, Csv
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config('SECRET_KEY', default='')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())
PUBLIC_BASE_URL = config('PUBLIC_BASE_URL', default='')


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # --- Mis Apps ---
    'core.apps.CoreConfig',
    'surveys.apps.SurveysConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.locale.LocaleMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'django_ratelimit.middleware.RatelimitMiddleware',
]

ROOT_URLCONF = 'feedbackqr.urls'

APPEND_SLASH = True

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'feedbackqr.wsgi.application'


# Database
DATABASES = {
    'default': {
        'ENGINE': config('DB_ENGINE', default='django.db.backends.postgresql'),
        'NAME': config('DB_NAME', default='feedbackqr_db'),
        'USER': config('DB_USER', default='postgres'),
        'PASSWORD': config('DB_PASSWORD', default=''),
        'HOST': config('DB_HOST', default='127.0.0.1'),
        'PORT': config('DB_PORT', default='5432'),
        'ATOMIC_REQUESTS': False,  # Disable to allow async views
    }
}


# Password validation
AUTH_PASSWORD_VALIDATORS = [
    { 'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator', },
    { 'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator', },
    { 'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator', },
    { 'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator', },
]


# Internationalization
LANGUAGE_CODE = 'es'
TIME_ZONE = config('TIME_ZONE', default='America/Santiago')
USE_I18N = True
USE_TZ = True


# Static files (CSS, JavaScript, Images)
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LOGIN_URL = '/admin/login/'


# ============================================================
# ANALYTICS
# ============================================================
# Máximo de IDs por consulta "in" contra la tabla de respuestas
RESPONSE_QUERY_CHUNK_SIZE = config('RESPONSE_QUERY_CHUNK_SIZE', default=30, cast=int)

# Umbral (ms) a partir del cual una agregación se registra como lenta
ANALYTICS_SLOW_THRESHOLD_MS = config('ANALYTICS_SLOW_THRESHOLD_MS', default=1000.0, cast=float)

# Límite de peticiones a los endpoints JSON del dashboard
ANALYTICS_RATELIMIT = config('ANALYTICS_RATELIMIT', default='60/m')
RATELIMIT_VIEW = 'core.views_ratelimit.ratelimit_error'


# ============================================================
# LOGGING CONFIGURATION
# ============================================================
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': { 'format': '[{levelname}] {asctime} {name} {module}.{funcName}:{lineno} - {message}', 'style': '{', 'datefmt': '%Y-%m-%d %H:%M:%S', },
        'simple': { 'format': '[{levelname}] {asctime} - {message}', 'style': '{', 'datefmt': '%Y-%m-%d %H:%M:%S', },
        'detailed': { 'format': '{asctime} | {name:30} | {levelname:8} | {funcName:20} | {message}', 'style': '{', 'datefmt': '%Y-%m-%d %H:%M:%S', },
    },
    'filters': {
        'require_debug_false': { '()': 'django.utils.log.RequireDebugFalse', },
        'require_debug_true': { '()': 'django.utils.log.RequireDebugTrue', },
    },
    'handlers': {
        'console': { 'level': 'DEBUG' if DEBUG else 'INFO', 'class': 'logging.StreamHandler', 'formatter': 'detailed', },
        'file_app': { 'level': 'INFO', 'class': 'logging.handlers.RotatingFileHandler', 'filename': BASE_DIR / 'logs' / 'app.log', 'maxBytes': 1024 * 1024 * 10, 'backupCount': 5, 'formatter': 'detailed', },
        'file_error': { 'level': 'ERROR', 'class': 'logging.handlers.RotatingFileHandler', 'filename': BASE_DIR / 'logs' / 'error.log', 'maxBytes': 1024 * 1024 * 10, 'backupCount': 5, 'formatter': 'verbose', },
        'file_performance': { 'level': 'INFO', 'class': 'logging.handlers.RotatingFileHandler', 'filename': BASE_DIR / 'logs' / 'performance.log', 'maxBytes': 1024 * 1024 * 10, 'backupCount': 3, 'formatter': 'verbose', },
        'mail_admins': { 'level': 'ERROR', 'class': 'django.utils.log.AdminEmailHandler', 'filters': ['require_debug_false'], 'formatter': 'verbose', },
    },
    'loggers': {
        'django': { 'handlers': ['console', 'file_app'], 'level': 'INFO', 'propagate': False, },
        'django.request': { 'handlers': ['console', 'file_error', 'mail_admins'], 'level': 'ERROR', 'propagate': False, },
        'core': { 'handlers': ['console', 'file_app', 'file_error'], 'level': 'DEBUG' if DEBUG else 'INFO', 'propagate': False, },
        'core.performance': { 'handlers': ['console', 'file_performance'], 'level': 'INFO', 'propagate': False, },
        'surveys': { 'handlers': ['console', 'file_app', 'file_error'], 'level': 'DEBUG' if DEBUG else 'INFO', 'propagate': False, },
    },
    'root': { 'handlers': ['console', 'file_app'], 'level': 'INFO', },
}

# Ensure logs dir exists
logs_dir = BASE_DIR / 'logs'
if not os.path.exists(logs_dir):
    os.makedirs(logs_dir)
