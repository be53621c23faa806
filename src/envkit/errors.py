"""Exceptions raised while coercing raw environment values.

"""

from __future__ import annotations

from typing import Optional


class ConversionError(ValueError):
    """Raised when raw text cannot be coerced into the requested shape.

    Args:
        message (str): Human readable description of the failure.
        raw (Optional[str]): Text that failed to convert, when available.
        kind (str): Shape token the text was being converted to.
    """

    def __init__(self, message: str, *, raw: Optional[str] = None, kind: str = "") -> None:
        super().__init__(message)
        self.raw = raw
        self.kind = kind
