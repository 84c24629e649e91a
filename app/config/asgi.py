"""
ASGI config for the gateway.

Named export for Uvicorn: config.asgi:gateway
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

gateway = get_asgi_application()
