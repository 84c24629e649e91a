"""
Django settings for the SuiNS → ENS CCIP-Read gateway.

Stateless: no database, sessions or templates. Everything the gateway
needs comes from the environment (optionally via a .env file).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=True)

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# ---------------- Security ------------------------------------------------- #

# Fail loud if SECRET_KEY is not set
SECRET_KEY = os.environ['SECRET_KEY']

# Fail loud if DEBUG is not explicitly set
_debug = os.environ.get('DEBUG')
if _debug is None:
  raise ValueError('DEBUG must be explicitly set in environment (true/false)')
DEBUG = _debug.lower() == 'true'

ALLOWED_HOSTS = [
  host.strip()
  for host in os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')
  if host.strip()
]


# ---------------- Application definition ---------------------------------- #

INSTALLED_APPS = [
  # project apps
  'api',
]

MIDDLEWARE = [
  'django.middleware.security.SecurityMiddleware',
  'middleware.wide_event_logging.WideEventLoggingMiddleware',
  'middleware.cors.CorsMiddleware',
  'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'config.urls'

WSGI_APPLICATION = 'config.wsgi.gateway'
ASGI_APPLICATION = 'config.asgi.gateway'


# ---------------- Database ------------------------------------------------ #

# Stateless gateway
DATABASES = {}


# ---------------- Internationalization ------------------------------------ #

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True


# ---------------- Logging ------------------------------------------------- #

LOGGING = {
  'version': 1,
  'disable_existing_loggers': False,
  'formatters': {
    'wide_event': {
      'format': '%(message)s',
    },
  },
  'handlers': {
    'wide_event_console': {
      'class': 'logging.StreamHandler',
      'formatter': 'wide_event',
    },
  },
  'loggers': {
    'wide_event': {
      'handlers': ['wide_event_console'],
      'level': os.getenv('LOG_LEVEL', 'INFO'),
      'propagate': False,
    },
  },
}


# ---------------- Gateway Config ------------------------------------------ #

GATEWAY_SIGNER_KEY = os.getenv('GATEWAY_SIGNER_KEY', '')

# Resolver contract bound into signatures (falls back to the request sender)
GATEWAY_VERIFYING_CONTRACT = os.getenv('GATEWAY_VERIFYING_CONTRACT', '')

GATEWAY_PARENT_DOMAIN = os.getenv('GATEWAY_PARENT_DOMAIN', 'onsui.eth')
GATEWAY_NATIVE_SUFFIX = os.getenv('GATEWAY_NATIVE_SUFFIX', 'sui')

# Seconds a signed response stays valid
GATEWAY_RESPONSE_TTL = int(os.getenv('GATEWAY_RESPONSE_TTL', '300'))


# ---------------- SuiNS Config -------------------------------------------- #

SUI_RPC_URL = os.getenv('SUI_RPC_URL', 'https://fullnode.mainnet.sui.io:443')
SUI_RPC_TIMEOUT = float(os.getenv('SUI_RPC_TIMEOUT', '10'))
SUINS_REGISTRY_TABLE_ID = os.getenv(
  'SUINS_REGISTRY_TABLE_ID',
  '0xe64cd9db9f829c6cc405d9790bd71567ae07259855f4fba6f02c84f52298c106',
)
SUINS_DOMAIN_TYPE = os.getenv(
  'SUINS_DOMAIN_TYPE',
  '0xd22b24490e0bae52676651b4f56660a5ff8022a2576e0089f79b3c88d44e08f0::domain::Domain',
)
