"""
Token authentication for the ``Authorization: Token <key>`` header.

Kept in its own module so ``REST_FRAMEWORK['DEFAULT_AUTHENTICATION_CLASSES']``
can import it without dragging in views (and their serializers) while DRF
is still initialising.  JWT bearer tokens are handled by simplejwt.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """DRF token auth with a stable project import path."""

    keyword = 'Token'
