"""
Resilient invocation layer for rate-limited model APIs.

Wraps remote calls in a retry-with-backoff executor and, for personal OAuth
logins, offers a one-shot downgrade to a lighter model when rate limiting
persists:
- retry_with_backoff: generic async retry driver (backoff + jitter)
- FallbackPolicy: consecutive-429 tracking and at-most-once fallback
- get_effective_model: session-start probe of the default "pro" model
- ModelSession: session-scoped model state with an injected fallback handler
"""

__version__ = "0.1.0"
