"""
Django settings for the jobboard project.
"""

from pathlib import Path
import os

from dotenv import load_dotenv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')


def _env_list(name, default=''):
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(',') if item.strip()]


def _env_int(name, default):
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


# -------------------------
# Basic / environment
# -------------------------
SECRET_KEY = os.environ.get('JOBBOARD_SECRET_KEY', 'django-insecure-dev-secret-for-local')

DEBUG = os.environ.get('JOBBOARD_DEBUG', 'True').lower() in ('1', 'true', 'yes')

# 'production' switches the auth cookie to cross-site + secure
ENVIRONMENT = os.environ.get('JOBBOARD_ENV', 'development').lower()
IS_PRODUCTION = ENVIRONMENT == 'production'

ALLOWED_HOSTS = _env_list('JOBBOARD_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver')


# -------------------------
# Installed apps / middleware
# -------------------------
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'corsheaders',

    # project apps
    'accounts',
    'jobs',
    'blogs',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'jobboard.middleware.StoreErrorMiddleware',
]

ROOT_URLCONF = 'jobboard.urls'


# -------------------------
# CORS
# -------------------------
CORS_ALLOWED_ORIGINS = _env_list('JOBBOARD_CORS_ORIGINS', 'http://localhost:5173')
CORS_ALLOW_CREDENTIALS = True


# -------------------------
# Templates (admin only)
# -------------------------
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


WSGI_APPLICATION = 'jobboard.wsgi.application'
ASGI_APPLICATION = 'jobboard.asgi.application'


# -------------------------
# Database (sqlite for dev)
# -------------------------
DATABASES = {
    'default': {
        'ENGINE': os.environ.get('JOBBOARD_DB_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': os.environ.get('JOBBOARD_DB_NAME', str(BASE_DIR / 'db.sqlite3')),
        'USER': os.environ.get('JOBBOARD_DB_USER', ''),
        'PASSWORD': os.environ.get('JOBBOARD_DB_PASSWORD', ''),
        'HOST': os.environ.get('JOBBOARD_DB_HOST', ''),
        'PORT': os.environ.get('JOBBOARD_DB_PORT', ''),
    }
}


# -------------------------
# Internationalization
# -------------------------
LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.environ.get('JOBBOARD_TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True


# -------------------------
# Static
# -------------------------
STATIC_URL = '/static/'
STATIC_ROOT = os.environ.get('JOBBOARD_STATIC_ROOT', os.path.join(BASE_DIR, 'staticfiles'))

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# -------------------------
# Auth token / cookie
# -------------------------
AUTH_TOKEN_SECRET = os.environ.get('JOBBOARD_TOKEN_SECRET', SECRET_KEY)
AUTH_TOKEN_MAX_AGE = 7 * 24 * 60 * 60
AUTH_COOKIE_NAME = os.environ.get('JOBBOARD_AUTH_COOKIE', 'token')
AUTH_COOKIE_SECURE = IS_PRODUCTION
AUTH_COOKIE_SAMESITE = 'None' if IS_PRODUCTION else 'Lax'


# -------------------------
# Job listing queries
# -------------------------
JOBS_PAGE_SIZE = _env_int('JOBBOARD_PAGE_SIZE', 10)
JOBS_MAX_PAGE_SIZE = _env_int('JOBBOARD_MAX_PAGE_SIZE', 100)
FEATURED_JOBS_LIMIT = 3


# -------------------------
# Logging (basic)
# -------------------------
LOG_LEVEL = os.environ.get('JOBBOARD_LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '%(asctime)s %(levelname)-8s %(name)s %(message)s'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'},
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO' if DEBUG else 'WARNING',
            'propagate': False,
        },
        'jobboard': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'accounts': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'jobs': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'blogs': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}


# -------------------------
# Security
# -------------------------
if IS_PRODUCTION:
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_HSTS_SECONDS = _env_int('JOBBOARD_HSTS_SECONDS', 0)
