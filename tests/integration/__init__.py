"""
Integration tests for the resilience layer.

Test components together without external services:
- Executor + ModelSession + fallback handler
- Executor + RateLimitSimulator (flash fallback flow)
"""
