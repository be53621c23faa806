"""In-memory override store consulted before the process environment.

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import yaml

LOGGER = logging.getLogger("envkit.overrides")

_MISSING = object()


class OverrideStore:
    """Mapping from variable name to an already-typed value.

    Stored values are returned verbatim by :meth:`envkit.engine.Environment.resolve`
    and never coerced. The store performs no locking; writers are expected to be
    serialized by the caller.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(initial) if initial else {}

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def has(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def keys(self) -> list[str]:
        return list(self._values)

    @contextmanager
    def temporary(self, key: str, value: Any) -> Iterator[Any]:
        """Override ``key`` for the duration of a ``with`` block.

        Args:
            key (str): Variable name to override.
            value (Any): Already-typed value to install.

        Returns:
            Iterator[Any]: Yields ``value``; on exit the previous entry (or its absence)
            is restored.

        Examples:
            >>> store = OverrideStore()
            >>> with store.temporary("PORT", 8080):
            ...     store.get("PORT")
            8080
        """
        previous = self._values.get(key, _MISSING)
        self._values[key] = value
        try:
            yield value
        finally:
            if previous is _MISSING:
                self._values.pop(key, None)
            else:
                self._values[key] = previous

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)


def load_overrides(path: str | Path, store: Optional[OverrideStore] = None) -> OverrideStore:
    """Load override entries from a YAML mapping.

    Args:
        path (str | Path): YAML file whose top level maps variable names to values.
        store (Optional[OverrideStore]): Store to update; a new one is created when omitted.

    Returns:
        OverrideStore: The updated store.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the document is not a mapping or has non-string keys.

    Side Effects / I/O:
        - Reads ``path`` from the local filesystem.
    """
    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"Override file not found: {resolved}")

    with resolved.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}

    if not isinstance(loaded, dict):
        raise ValueError("Override file must be a YAML object.")
    bad_keys = [key for key in loaded if not isinstance(key, str)]
    if bad_keys:
        raise ValueError(f"Override keys must be strings, got: {bad_keys!r}")

    target = store if store is not None else OverrideStore()
    for key, value in loaded.items():
        target.set(key, value)
    LOGGER.debug("Loaded %s override(s) from %s", len(loaded), resolved)
    return target
