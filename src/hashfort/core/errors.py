"""Error taxonomy shared by the validator, engine, and HTTP layer."""


class HashFortError(Exception):
    """Base HashFort error with an error code and HTTP status."""

    def __init__(self, message: str, code: str, status_code: int = 400, **extra):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.extra = extra
        super().__init__(message)


class ValidationError(HashFortError):
    """Empty or non-string password or hash. Always caller-caused."""

    def __init__(self, message: str, code: str = "empty_or_non_string"):
        super().__init__(message, code=code, status_code=400)


class EmptyBatchError(ValidationError):
    """Batch is missing, not a list, or has no entries."""

    def __init__(self, message: str = "Passwords must be a non-empty array"):
        super().__init__(message, code="empty_batch")


class BatchSizeError(ValidationError):
    """Batch exceeds the configured maximum size."""

    def __init__(self, max_size: int):
        super().__init__(f"Batch size limited to {max_size} passwords", code="batch_too_large")
        self.max_size = max_size


# EngineError reasons and the HTTP status each one maps to. Malformed input
# stays in the 4xx range, resource exhaustion and internal failures do not.
ENGINE_INVALID_HASH = "invalid_hash"
ENGINE_TIMEOUT = "timeout"
ENGINE_FAILURE = "failure"

_ENGINE_STATUS = {
    ENGINE_INVALID_HASH: 400,
    ENGINE_TIMEOUT: 503,
    ENGINE_FAILURE: 500,
}


class EngineError(HashFortError):
    """Failure raised by or around the hashing primitive."""

    def __init__(self, message: str, reason: str = ENGINE_FAILURE):
        super().__init__(
            message,
            code=f"engine_{reason}",
            status_code=_ENGINE_STATUS.get(reason, 500),
        )
        self.reason = reason


class RateLimitError(HashFortError):
    """Too many requests for one client within the configured window."""

    def __init__(self, retry_after: float):
        super().__init__(
            "Too many requests. Please try again later.",
            code="rate_limit_exceeded",
            status_code=429,
            retry_after=retry_after,
        )
