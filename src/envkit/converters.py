"""Scalar converters from raw environment text to typed values.

"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from envkit.defaults import TRUTHY_TOKENS
from envkit.errors import ConversionError
from envkit.shapes import ShapeKind

T = TypeVar("T")

_FLOAT_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_DECIMAL_INTEGER = re.compile(r"[+-]?\d+")
_RADIX_PREFIXES: Dict[str, int] = {"0x": 16, "0o": 8, "0b": 2}
_RADIX_DIGITS: Dict[int, re.Pattern[str]] = {
    16: re.compile(r"[0-9a-fA-F]+"),
    8: re.compile(r"[0-7]+"),
    2: re.compile(r"[01]+"),
}


def to_boolean(raw: Optional[str], fallback: Any = None) -> Any:
    """Convert raw text to a boolean.

    Args:
        raw (Optional[str]): Raw environment text, ``None`` when unset.
        fallback (Any): Value returned when ``raw`` is ``None``.

    Returns:
        Any: ``True`` for ``"true"``/``"1"`` (case-insensitive, trimmed), ``False`` for any
        other text, ``fallback`` when unset.
    """
    if raw is None:
        return fallback
    return raw.strip().lower() in TRUTHY_TOKENS


def to_number(raw: Optional[str]) -> float:
    """Parse the leading numeric prefix of ``raw`` as a float.

    Text without a numeric prefix (and ``None``) yields ``nan`` instead of raising.
    """
    if raw is None:
        return math.nan
    match = _FLOAT_PREFIX.match(raw.lstrip())
    if not match:
        return math.nan
    text = match.group(0)
    if text.endswith("Infinity"):
        return -math.inf if text.startswith("-") else math.inf
    return float(text)


def to_integer(raw: Optional[str]) -> int:
    """Parse ``raw`` as an arbitrary-precision integer.

    Args:
        raw (Optional[str]): Decimal text with optional sign, or ``0x``/``0o``/``0b`` prefixed text.

    Returns:
        int: Parsed integer. Blank text parses as ``0``.

    Raises:
        ConversionError: If ``raw`` is missing or is not integer text.
    """
    if raw is None:
        raise ConversionError("Cannot convert a missing value to an integer.", raw=raw, kind=ShapeKind.BIGINT.value)

    text = raw.strip()
    if not text:
        return 0
    if _DECIMAL_INTEGER.fullmatch(text):
        return int(text)

    base = _RADIX_PREFIXES.get(text[:2].lower())
    digits = text[2:]
    if base is None or not _RADIX_DIGITS[base].fullmatch(digits):
        raise ConversionError(f"Cannot convert {raw!r} to an integer.", raw=raw, kind=ShapeKind.BIGINT.value)
    return int(digits, base)


def to_object(text: Optional[str]) -> Any:
    if text is None:
        raise ConversionError("Cannot parse a missing value as JSON.", raw=text, kind=ShapeKind.OBJECT.value)
    try:
        return json.loads(text)
    except json.JSONDecodeError as err:
        raise ConversionError(f"Cannot parse {text!r} as JSON: {err}", raw=text, kind=ShapeKind.OBJECT.value) from err


def to_pattern(source: Optional[str], flags: int = 0) -> re.Pattern[str]:
    """Compile ``source`` into a regular expression.

    Raises:
        ConversionError: If the source is missing or is not a valid pattern.
    """
    if source is None:
        raise ConversionError("Cannot compile a missing pattern source.", raw=source, kind=ShapeKind.REGEXP.value)
    try:
        return re.compile(source, flags)
    except re.error as err:
        raise ConversionError(f"Invalid pattern {source!r}: {err}", raw=source, kind=ShapeKind.REGEXP.value) from err


def map_array(raw_elements: Iterable[str], converter: Callable[[str], T]) -> List[T]:
    # Converter errors propagate: one malformed element invalidates the whole list.
    return [converter(element) for element in raw_elements]


def element_converter(kind: Optional[ShapeKind]) -> Callable[[str], Any]:
    """Return the scalar converter used for array elements of ``kind``."""
    if kind is ShapeKind.BOOLEAN:
        return to_boolean
    if kind is ShapeKind.NUMBER:
        return to_number
    if kind is ShapeKind.BIGINT:
        return to_integer
    if kind is ShapeKind.OBJECT:
        return to_object
    if kind is ShapeKind.REGEXP:
        return to_pattern
    return _identity


def _identity(raw: str) -> str:
    return raw
