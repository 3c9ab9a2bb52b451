"""
Authentication classes referenced from ``REST_FRAMEWORK`` settings.

Kept free of view imports so DRF can load them at start-up without
circular imports.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """DRF token auth with the ``Token`` keyword, as issued by login."""

    keyword = 'Token'
