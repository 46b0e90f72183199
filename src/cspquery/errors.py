from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INDEX_FETCH_FAILED = "INDEX_FETCH_FAILED"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    PAGE_FETCH_FAILED = "PAGE_FETCH_FAILED"
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"
    INVALID_INPUT = "INVALID_INPUT"


class CspQueryError(Exception):
    """Raised for all expected failure conditions.

    Handlers catch it at the operation boundary, log it and hand it back to
    the CLI in the query result. It never turns into a non-zero exit status.
    """

    def __init__(self, code: ErrorCode, message: str, suggestion: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
            }
        }


class FetchError(CspQueryError):
    """Network or HTTP failure. ``status_code`` is None when no response arrived."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        *,
        url: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(code, message, suggestion)
        self.url = url
        self.status_code = status_code

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["error"]["url"] = self.url
        payload["error"]["status_code"] = self.status_code
        return payload


class CacheWriteError(CspQueryError):
    """Filesystem failure while clearing or writing the index cache."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(
            ErrorCode.CACHE_WRITE_FAILED,
            message,
            "Check that the cache path is writable (CSPQUERY__CACHE__PATH).",
        )
        self.path = path
