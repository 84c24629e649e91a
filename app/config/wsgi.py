"""
WSGI config for the gateway.

Named export for Gunicorn: config.wsgi:gateway
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

gateway = get_wsgi_application()
