"""Shape declarations and shape inference for environment values.

A shape names the type a raw environment string is coerced into. Callers
either declare it with one of the literal tokens (``"number"``,
``"array<bigint>"`` ...) or let it be inferred from the default value.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

LOGGER = logging.getLogger("envkit.shapes")

_ARRAY_TOKEN = re.compile(r"^array<\s*([a-z]+(?:<.*>)?)\s*>$")


class ShapeKind(str, Enum):
    """Closed set of shape kinds; values are the literal declaration tokens."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    BIGINT = "bigint"
    STRING = "string"
    OBJECT = "object"
    REGEXP = "regexp"
    ARRAY = "array"
    FUNCTION = "function"


@dataclass(frozen=True)
class Shape:
    """Resolved target shape.

    Args:
        kind (ShapeKind): Outer kind used for dispatch.
        element (Optional[ShapeKind]): Element kind, set only for ``array`` shapes.
    """

    kind: ShapeKind
    element: Optional[ShapeKind] = None

    def __post_init__(self) -> None:
        if self.kind is ShapeKind.ARRAY:
            if self.element is None:
                object.__setattr__(self, "element", ShapeKind.STRING)
            elif self.element is ShapeKind.ARRAY:
                raise ValueError("Array shapes cannot nest arrays.")
        elif self.element is not None:
            raise ValueError(f"Only array shapes carry an element kind, got {self.kind.value!r}.")

    @property
    def token(self) -> str:
        if self.kind is ShapeKind.ARRAY:
            return f"array<{self.element.value}>"  # type: ignore[union-attr]
        return self.kind.value

    def __str__(self) -> str:
        return self.token


ShapeLike = Union[Shape, ShapeKind, str]


def parse_shape(declared: Optional[ShapeLike]) -> Optional[Shape]:
    """Parse a declared shape.

    Args:
        declared (Optional[ShapeLike]): ``Shape``, ``ShapeKind`` or literal token such as
            ``"boolean"`` or ``"array<number>"``.

    Returns:
        Optional[Shape]: Parsed shape, or ``None`` when nothing usable was declared.

    Raises:
        ValueError: If the token declares an array of arrays.

    Examples:
        >>> from envkit.shapes import parse_shape
        >>> parse_shape("array<number>")
    """
    if declared is None or isinstance(declared, Shape):
        return declared
    if isinstance(declared, ShapeKind):
        return Shape(declared)

    token = str(declared).strip().lower()
    match = _ARRAY_TOKEN.match(token)
    if match:
        inner = match.group(1)
        if inner.startswith("array"):
            raise ValueError(f"Array shapes cannot nest arrays: {declared!r}.")
        element = _lookup_kind(inner)
        if element is None:
            LOGGER.warning("Unrecognized array element shape %r; elements stay strings.", inner)
            element = ShapeKind.STRING
        return Shape(ShapeKind.ARRAY, element)

    kind = _lookup_kind(token)
    if kind is None:
        LOGGER.warning("Unrecognized shape %r; falling back to raw passthrough.", declared)
        return None
    return Shape(kind)


def infer_shape(default: Any) -> Optional[Shape]:
    """Infer the shape implied by the runtime type of ``default``."""
    if default is None:
        return None
    if isinstance(default, re.Pattern):
        return Shape(ShapeKind.REGEXP)
    if callable(default):
        return Shape(ShapeKind.FUNCTION)
    if isinstance(default, (list, tuple)):
        return Shape(ShapeKind.ARRAY, ShapeKind.STRING)
    if isinstance(default, dict):
        return Shape(ShapeKind.OBJECT)
    # bool is an int subclass, so it must be checked first.
    if isinstance(default, bool):
        return Shape(ShapeKind.BOOLEAN)
    if isinstance(default, int):
        return Shape(ShapeKind.BIGINT)
    if isinstance(default, float):
        return Shape(ShapeKind.NUMBER)
    if isinstance(default, str):
        return Shape(ShapeKind.STRING)
    return None


def _lookup_kind(token: str) -> Optional[ShapeKind]:
    try:
        return ShapeKind(token)
    except ValueError:
        return None
