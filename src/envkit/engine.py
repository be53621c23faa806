"""Typed resolution of environment variables.

``Environment.resolve`` checks the override store, resolves the target shape
(declared or inferred from the default), reads the raw environment string and
hands both to :func:`coerce`.
"""

from __future__ import annotations

import json
import logging
import math
import os
import re
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from envkit.container import ContainerProbe
from envkit.converters import (
    element_converter,
    map_array,
    to_boolean,
    to_integer,
    to_number,
    to_object,
    to_pattern,
)
from envkit.defaults import ARRAY_SEPARATOR
from envkit.overrides import OverrideStore
from envkit.shapes import Shape, ShapeKind, ShapeLike, infer_shape, parse_shape

T = TypeVar("T")
DefaultValueGetter = Union[T, Callable[[], T]]

LOGGER = logging.getLogger("envkit.engine")


def coerce(raw: Optional[str], shape: Optional[Shape], default: Any = None) -> Any:
    """Coerce a raw environment string into ``shape``.

    Args:
        raw (Optional[str]): Raw environment text, ``None`` when the variable is unset.
        shape (Optional[Shape]): Target shape; ``None`` means raw passthrough.
        default (Any): Fallback value, or a zero-argument producer called once when ``raw`` is unset.

    Returns:
        Any: Coerced value. Raw text takes priority; ``default`` is used when it is absent.

    Raises:
        ConversionError: For malformed integer, pattern or JSON text.
    """
    kind = shape.kind if shape is not None else None

    # A producer default stands in for a literal one on the fallback path only.
    if raw is None and kind is not ShapeKind.FUNCTION and _is_producer(default):
        default = default()

    if kind is ShapeKind.BOOLEAN:
        return to_boolean(raw, default)
    if kind is ShapeKind.NUMBER:
        return to_number(raw if raw is not None else _default_text(default))
    if kind is ShapeKind.BIGINT:
        return to_integer(raw if raw is not None else _default_text(default))
    if kind is ShapeKind.FUNCTION:
        if raw:
            return raw
        return default() if callable(default) else default
    if kind is ShapeKind.ARRAY:
        if raw is None:
            return default
        return map_array(raw.split(ARRAY_SEPARATOR), element_converter(shape.element))  # type: ignore[union-attr]
    if kind is ShapeKind.REGEXP:
        if isinstance(default, re.Pattern):
            source = raw if raw is not None else default.pattern
            return to_pattern(source, default.flags)
        if isinstance(default, str):
            return to_pattern(raw if raw is not None else default)
        return to_pattern(raw)

    if isinstance(default, (list, tuple)):
        return raw.split(ARRAY_SEPARATOR) if raw is not None else default
    if isinstance(default, re.Pattern):
        return to_pattern(raw if raw is not None else default.pattern, default.flags)
    if kind is ShapeKind.OBJECT:
        # Defaults are normalized through their JSON form even on the fallback path.
        return to_object(raw if raw is not None else json.dumps(default))
    if raw:
        return raw
    if default is not None:
        return default
    return raw


class Environment:
    """Typed accessor over the process environment.

    Subclasses usually expose typed properties built on :meth:`get_or_default`::

        class ServiceEnvironment(Environment):
            @property
            def port(self) -> int:
                return self.get_or_default("PORT", 8080)

    Args:
        environ (Optional[Mapping[str, str]]): Raw variables; ``os.environ`` is read at call time
            when omitted.
        overrides (Optional[OverrideStore]): Store consulted before ``environ``.
        probe (Optional[ContainerProbe]): Container detection probe.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[OverrideStore] = None,
        probe: Optional[ContainerProbe] = None,
    ) -> None:
        self._environ = environ
        self.overrides = overrides if overrides is not None else OverrideStore()
        self.probe = probe if probe is not None else ContainerProbe()

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    def resolve(
        self,
        key: str,
        default: Optional[DefaultValueGetter[T]] = None,
        shape: Optional[ShapeLike] = None,
    ) -> T:
        """Resolve ``key`` to a typed value.

        Args:
            key (str): Environment variable name.
            default (Optional[DefaultValueGetter[T]]): Fallback value or zero-argument producer.
            shape (Optional[ShapeLike]): Declared shape such as ``"bigint"`` or ``"array<number>"``.
                Required for non-string results when ``default`` is ``None``.

        Returns:
            T: Override value when one is set, otherwise the coerced environment value.

        Raises:
            ConversionError: For malformed integer, pattern or JSON text.
            ValueError: If ``shape`` declares an array of arrays.

        Examples:
            >>> from envkit import Environment
            >>> Environment({"RETRIES": "3"}).resolve("RETRIES", 1)
            3
        """
        if self.overrides.has(key):
            LOGGER.debug("Resolved %s from override", key)
            return self.overrides.get(key)

        resolved_shape = parse_shape(shape) if shape is not None else infer_shape(default)
        raw = self.environ.get(key)
        if raw is None:
            LOGGER.debug("%s is unset; using default for shape %s", key, resolved_shape)
        return coerce(raw, resolved_shape, default)

    get_or_default = resolve

    def override_variable(self, key: str, value: Any) -> None:
        self.overrides.set(key, value)

    def is_variable_overridden(self, key: str) -> bool:
        return self.overrides.has(key)

    def get_overridden_variable(self, key: str) -> Any:
        return self.overrides.get(key)

    def remove_overridden_variable(self, key: str) -> None:
        self.overrides.remove(key)

    def has_container_marker_file(self) -> bool:
        return self.probe.has_marker_file()

    def has_container_cgroup_marker(self) -> bool:
        return self.probe.has_cgroup_marker()

    def is_container(self) -> bool:
        return self.probe.is_container()


def _is_producer(default: Any) -> bool:
    return callable(default) and not isinstance(default, re.Pattern)


def _default_text(default: Any) -> Optional[str]:
    if default is None:
        return None
    if isinstance(default, bool):
        return "true" if default else "false"
    if isinstance(default, float):
        if math.isnan(default):
            return "NaN"
        if math.isinf(default):
            return "-Infinity" if default < 0 else "Infinity"
        if default.is_integer():
            return str(int(default))
    return str(default)
