"""Public package entrypoints for envkit.

The module-level functions operate on a process-wide default
:class:`~envkit.engine.Environment`. Construct an ``Environment`` directly to
get an isolated override store or a custom container probe. Call
:func:`setup_logging` to surface the package's debug records.
"""

from __future__ import annotations

from typing import Any, Optional

from envkit.container import ContainerProbe
from envkit.engine import DefaultValueGetter, Environment, coerce
from envkit.errors import ConversionError
from envkit.overrides import OverrideStore, load_overrides
from envkit.shapes import Shape, ShapeKind, ShapeLike, infer_shape, parse_shape
from envkit.utils.logging import setup_logging

_DEFAULT_ENVIRONMENT = Environment()


def default_environment() -> Environment:
    return _DEFAULT_ENVIRONMENT


def resolve(key: str, default: Optional[DefaultValueGetter[Any]] = None, shape: Optional[ShapeLike] = None) -> Any:
    return _DEFAULT_ENVIRONMENT.resolve(key, default, shape)


def override_variable(key: str, value: Any) -> None:
    _DEFAULT_ENVIRONMENT.override_variable(key, value)


def is_variable_overridden(key: str) -> bool:
    return _DEFAULT_ENVIRONMENT.is_variable_overridden(key)


def get_overridden_variable(key: str) -> Any:
    return _DEFAULT_ENVIRONMENT.get_overridden_variable(key)


def remove_overridden_variable(key: str) -> None:
    _DEFAULT_ENVIRONMENT.remove_overridden_variable(key)


def has_container_marker_file() -> bool:
    return _DEFAULT_ENVIRONMENT.has_container_marker_file()


def has_container_cgroup_marker() -> bool:
    return _DEFAULT_ENVIRONMENT.has_container_cgroup_marker()


def is_container() -> bool:
    return _DEFAULT_ENVIRONMENT.is_container()


__all__ = [
    "ContainerProbe",
    "ConversionError",
    "Environment",
    "OverrideStore",
    "Shape",
    "ShapeKind",
    "coerce",
    "default_environment",
    "get_overridden_variable",
    "has_container_cgroup_marker",
    "has_container_marker_file",
    "infer_shape",
    "is_container",
    "is_variable_overridden",
    "load_overrides",
    "override_variable",
    "parse_shape",
    "remove_overridden_variable",
    "resolve",
    "setup_logging",
]
__version__ = "0.1.0"
