"""
Enumerations and well-known identifiers for the resilience layer.
"""

from enum import Enum


class AuthType(str, Enum):
    """
    How the caller is authenticated against the model API.

    Only LOGIN_WITH_GOOGLE_PERSONAL is an OAuth-derived mode; the other
    modes are metered key/project based access and never receive the
    model fallback offer.
    """

    LOGIN_WITH_GOOGLE_PERSONAL = "oauth-personal"
    USE_GEMINI = "gemini-api-key"
    USE_VERTEX_AI = "vertex-ai"

    @classmethod
    def is_oauth(cls, auth_type: "AuthType | str | None") -> bool:
        """True when auth_type is a personal OAuth login (enum or raw value)."""
        if auth_type is None:
            return False
        # Enum members hash by name, so compare by value instead of set lookup
        return any(auth_type == member.value for member in OAUTH_AUTH_TYPES)


OAUTH_AUTH_TYPES = frozenset({AuthType.LOGIN_WITH_GOOGLE_PERSONAL})

DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"
DEFAULT_GEMINI_FLASH_MODEL = "gemini-2.5-flash"
