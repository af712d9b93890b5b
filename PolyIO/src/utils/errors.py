"""Error kinds raised by PolyIO.

Two kinds cover every failure the library reports:

    PolyIOError (base)
    ├── IoError          opening, reading, writing or finalizing a stream
    └── ConversionError  record <-> row shape/type mismatch, malformed delimited text

Both carry the original exception as ``cause`` (and as ``__cause__`` when raised with
``raise ... from exc``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union


class PolyIOError(Exception):
    """Base class for all PolyIO errors.

    Attributes:
        message: Human readable description.
        cause: Underlying exception, if any.
        details: Extra context (path, row number, ...).
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Return the error as a plain dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


class IoError(PolyIOError):
    """A stream could not be opened, read, written or finalized."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause)
        self.path = str(path) if path is not None else None
        if self.path is not None:
            self.details["path"] = self.path


class ConversionError(PolyIOError):
    """A record could not be turned into a row, or a row into a record."""

    def __init__(
        self,
        message: str,
        row: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        if row is not None:
            message = f"{message} (row {row})"
        super().__init__(message, cause)
        self.row = row
        if row is not None:
            self.details["row"] = row
