"""
ASGI entry point for the hms project (uvicorn, daphne).

The API is plain request/response, so the Django ASGI handler is served
directly without a protocol router.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "hms.settings")

application = get_asgi_application()
