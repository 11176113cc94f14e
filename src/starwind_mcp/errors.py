from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    RATE_LIMITED = "RATE_LIMITED"
    UPSTREAM_FETCH_FAILED = "UPSTREAM_FETCH_FAILED"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    DOCS_FETCH_FAILED = "DOCS_FETCH_FAILED"
    MANIFEST_FETCH_FAILED = "MANIFEST_FETCH_FAILED"
    INVALID_INPUT = "INVALID_INPUT"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"


class StarwindError(Exception):
    """Raised by tool handlers for all expected failure conditions.

    Caught by the tool registry and wrapped into a ``Fatal`` result, which
    server.py serialises into the MCP error response. Expected outcomes the
    user must act on (e.g. unknown component names) are returned as
    ``Recoverable`` results instead of being raised.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class RateLimitedError(StarwindError):
    """Raised when a resolver's per-minute request budget is exhausted."""

    def __init__(self, reset_after_seconds: int, max_calls_per_minute: int) -> None:
        super().__init__(
            code=ErrorCode.RATE_LIMITED,
            message=(
                f"Rate limit exceeded. Please try again in {reset_after_seconds} seconds. "
                f"(Limit: {max_calls_per_minute} requests per minute)"
            ),
            suggestion="Wait for the rate limit window to reset, or reuse the previous result.",
            recoverable=True,
        )
        self.reset_after_seconds = reset_after_seconds
        self.max_calls_per_minute = max_calls_per_minute

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["error"]["resetAfterSeconds"] = self.reset_after_seconds
        return payload
