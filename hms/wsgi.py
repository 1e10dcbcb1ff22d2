"""
WSGI entry point for the hms project (gunicorn, uWSGI, mod_wsgi).

Exposes the callable as the module-level ``application``.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hms.settings')

application = get_wsgi_application()
