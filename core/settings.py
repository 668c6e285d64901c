import os
from pathlib import Path
from dotenv import load_dotenv   # <- nur für lokale/Dev-Umgebung

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent
# ------------------------------------------------------------------
# Laden der Umgebungsvariablen (nur wenn .env existiert)
# ------------------------------------------------------------------
dotenv_path = BASE_DIR / '.env'
if dotenv_path.exists():
  load_dotenv(dotenv_path)

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv('SECRET_KEY')
if not SECRET_KEY:
  raise RuntimeError('SECRET_KEY is not set in environment!')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DEBUG', 'False').lower() in ('1', 'true', 'yes')

# Split ALLOWED_HOSTS by comma, strip spaces
allowed_hosts_raw = os.getenv('ALLOWED_HOSTS', '127.0.0.1')
ALLOWED_HOSTS = [h.strip() for h in allowed_hosts_raw.split(',')]

STRING_TO_ADMIN_PATH = os.getenv('STRING_TO_ADMIN_PAGE', 'admin/')

# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'django_smart_ratelimit',
    'config',
    'gateway.apps.GatewayConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'core.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [ BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'core.wsgi.application'


# ------------------------------------------------------------------
# Datenbank
# ------------------------------------------------------------------
DATABASES = {
  'default': {
      'ENGINE': os.getenv('DB_ENGINE', 'django.db.backends.sqlite3'),
      'NAME': os.getenv('DB_NAME', BASE_DIR / 'db/db.sqlite3'),
      'USER': os.getenv('DB_USER', ''),
      'PASSWORD': os.getenv('DB_PASSWORD', ''),
      'HOST': os.getenv('DB_HOST', ''),
      'PORT': os.getenv('DB_PORT', ''),
  }
}


AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]


# Internationalization
# https://docs.djangoproject.com/en/5.1/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


# Static files (CSS, JavaScript, Images)
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LOGIN_URL = f'/{STRING_TO_ADMIN_PATH}login/'

PLATFORM_NAME = os.getenv('PLATFORM_NAME', 'Blink for Shops')

# ------------------------------------------------------------------
# Cache – Option Store liest über den Cache (siehe config/utils.py)
# ------------------------------------------------------------------
REDIS_SERVER_IP = os.getenv('REDIS_SERVER_IP', '127.0.0.1')
REDIS_SERVER_PORT = os.getenv('REDIS_SERVER_PORT', '6379')
REDIS_SERVER_DB = os.getenv('REDIS_SERVER_DB', '0')

CACHE_BACKEND = os.getenv('CACHE_BACKEND', 'locmem')
if CACHE_BACKEND == 'redis':
  CACHES = {
      'default': {
          'BACKEND': 'django.core.cache.backends.redis.RedisCache',
          'LOCATION': f'redis://{REDIS_SERVER_IP}:{REDIS_SERVER_PORT}/{REDIS_SERVER_DB}',
      }
  }
else:
  CACHES = {
      'default': {
          'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
      }
  }

RATELIMIT_BACKEND = os.getenv('RATELIMIT_BACKEND', 'redis')
RATELIMIT_REDIS = {
    'host': REDIS_SERVER_IP,
    'port': REDIS_SERVER_PORT,
    'db': REDIS_SERVER_DB,
}
USER_RATELIMIT_PER_HOUR = int(os.getenv('USER_RATELIMIT_PER_HOUR', '100'))

# ------------------------------------------------------------------
# Blink
# ------------------------------------------------------------------
BLINK_VERSION = '2.1.0'
# Transport‑Timeout für die Prüfung des API‑Keys (Sekunden)
BLINK_API_TIMEOUT = float(os.getenv('BLINK_API_TIMEOUT', '30'))
BLINK_WEBHOOK_PATH = os.getenv('BLINK_WEBHOOK_PATH', 'wc-api/galoy_blink_default/')

# -------------------------------------------------------------
# Logging – separate Log‑Datei für das Blink‑Debug‑Log
# -------------------------------------------------------------
LOG_DIR = Path(os.getenv('LOG_DIR', BASE_DIR / 'logs'))
LOG_DIR.mkdir(parents=True, exist_ok=True)
BLINK_LOG_FILE = LOG_DIR / 'blink.log'

LOGGING = {
  'version': 1,
  'disable_existing_loggers': False,
  'formatters': {
      'verbose': {
          'format': '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
          'datefmt': '%Y-%m-%d %H:%M:%S',
      },
  },
  'handlers': {
      # Standard‑Django‑Handler
      'console': {
          'class': 'logging.StreamHandler',
          'formatter': 'verbose',
      },
      # Blink‑Debug‑Log (max 5MB, 3 alte Log‑Dateien behalten)
      'blink_file': {
          'class': 'logging.handlers.RotatingFileHandler',
          'filename': BLINK_LOG_FILE,
          'maxBytes': 5 * 1024 * 1024,
          'backupCount': 3,
          'formatter': 'verbose',
          'encoding': 'utf-8',
      },
  },
  'loggers': {
      'django': {
          'handlers': ['console'],
          'level': os.getenv('DJANGO_LOG_LEVEL', 'INFO'),
          'propagate': False,
      },
      # Schalter liegt in der Option galoy_blink_debug, nicht hier
      'blink': {
          'handlers': ['blink_file'],
          'level': 'DEBUG',
          'propagate': False,
      },
      'gateway': {
          'handlers': ['console'],
          'level': os.getenv('GATEWAY_LOG_LEVEL', 'INFO'),
          'propagate': False,
      },
  },
}
