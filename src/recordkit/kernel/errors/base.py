"""BaseError – root of the recordkit error tree."""

from __future__ import annotations

import json
from typing import Any, ClassVar


class BaseError(Exception):
    """Root of every error recordkit raises.

    Subclasses set a machine-readable ``default_code`` and say whether the
    failure is ``retryable``: store outages are, bad input and missing
    records are not.  ``detail`` holds JSON-friendly context (the key that
    was looked up, the driver's error code); ``cause`` is the exception a
    store adapter translated.
    """

    default_code: ClassVar[str] = "recordkit_error"
    retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def log_fields(self) -> dict[str, Any]:
        """Fields bound onto the ``record.store_failed`` log event."""
        fields: dict[str, Any] = {
            "error": self.code,
            "error_type": type(self).__name__,
            "retryable": self.retryable,
        }
        if self.cause is not None:
            fields["cause"] = repr(self.cause)
        return fields

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.detail:
            payload["detail"] = self.detail
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code}: {self.message!r})"


__all__ = ["BaseError"]
