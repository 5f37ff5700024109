from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_OPTIONS = "INVALID_OPTIONS"
    PAGE_READ_FAILED = "PAGE_READ_FAILED"
    PAGE_WRITE_FAILED = "PAGE_WRITE_FAILED"
    PAGE_PROCESSING_FAILED = "PAGE_PROCESSING_FAILED"


class PageTocError(Exception):
    """Raised for all expected failure conditions.

    Missing page structure (no content container, no placeholder, too few
    headings) is never an error. This is reserved for bad options and for
    per-page failures that the CLI reports and moves past.
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
