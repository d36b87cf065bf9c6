"""
Unit tests for the resilience layer.

Test individual components in isolation:
- Error classification and backoff math
- Fallback policy (consecutive 429s, OAuth gating, at-most-once)
- Retry executor (attempt counting, delays, exhaustion)
- Effective-model probe (mocked HTTP transport)
- Session wiring, confirmers, 429 simulation
"""
