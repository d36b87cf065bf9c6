"""
Data models for the resilience layer.

Components:
- AuthType: authentication modes (OAuth vs API key)
- Default "pro" and "flash" model identifiers
"""

from resilience_layer.models.enums import (
    DEFAULT_GEMINI_FLASH_MODEL,
    DEFAULT_GEMINI_MODEL,
    OAUTH_AUTH_TYPES,
    AuthType,
)

__all__ = [
    "AuthType",
    "OAUTH_AUTH_TYPES",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_GEMINI_FLASH_MODEL",
]
