"""
Retry executor exceptions.

Only two errors are synthesized by the executor itself. Every other failure
reaching the caller is the operation's own exception, re-raised verbatim.
"""


class RateLimitExceeded(Exception):
    """
    Raised when attempts run out and the last failure was a rate limit (429).

    Chained (`raise ... from`) to the last error observed from the operation.

    Attributes:
        status: Always 429, so the error classifies like the original
        attempts: Number of attempts made
        last_error: Final rate-limit error returned by the operation
    """

    status = 429

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Rate limit exceeded after {attempts} attempts: {last_error}"
        )


class RetryCancelled(Exception):
    """
    Raised from a pending backoff sleep when its sleeper is cancelled.

    Signals that the owning session is shutting down and no further
    attempts will be made.
    """

    def __init__(self, message: str = "Retry cancelled during backoff") -> None:
        super().__init__(message)
