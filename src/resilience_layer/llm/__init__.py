"""
Model API helpers.

Components:
- get_effective_model: session-start probe of the default "pro" model
- exceptions: status-carrying model API errors
"""

from resilience_layer.llm.exceptions import (
    LLMClientError,
    LLMConnectionError,
    LLMRateLimitError,
    LLMServerError,
)
from resilience_layer.llm.model_check import build_probe_payload, get_effective_model

__all__ = [
    "get_effective_model",
    "build_probe_payload",
    "LLMClientError",
    "LLMConnectionError",
    "LLMRateLimitError",
    "LLMServerError",
]
