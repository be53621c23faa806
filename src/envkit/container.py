"""Heuristic detection of container runtimes.

"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import Optional

from envkit.defaults import (
    CONTAINER_CGROUP_PATH,
    CONTAINER_CGROUP_TOKEN,
    CONTAINER_MARKER_PATH,
    LINUX_PLATFORM_PREFIX,
)

LOGGER = logging.getLogger("envkit.container")


class ContainerProbe:
    """Filesystem probes for container detection.

    Both probes only run on Linux-family platforms and never raise. The
    ``is_container`` aggregate is computed at most once per probe instance.

    Args:
        marker_path (str | Path): Sentinel file created by the container runtime.
        cgroup_path (str | Path): Process cgroup metadata file.
        marker_token (str): Token searched for in the cgroup file.
        platform (Optional[str]): Platform name; ``sys.platform`` is read at call time when omitted.
    """

    def __init__(
        self,
        marker_path: str | Path = CONTAINER_MARKER_PATH,
        cgroup_path: str | Path = CONTAINER_CGROUP_PATH,
        marker_token: str = CONTAINER_CGROUP_TOKEN,
        platform: Optional[str] = None,
    ) -> None:
        self.marker_path = Path(marker_path)
        self.cgroup_path = Path(cgroup_path)
        self.marker_token = marker_token
        self._platform = platform
        self._memo: Optional[bool] = None
        self._memo_lock = threading.Lock()

    @property
    def platform(self) -> str:
        return self._platform if self._platform is not None else sys.platform

    def is_supported_platform(self) -> bool:
        return self.platform.startswith(LINUX_PLATFORM_PREFIX)

    def has_marker_file(self) -> bool:
        if not self.is_supported_platform():
            return False
        try:
            return self.marker_path.exists()
        except OSError:
            return False

    def has_cgroup_marker(self) -> bool:
        if not self.is_supported_platform():
            return False
        try:
            content = self.cgroup_path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return False
        return self.marker_token in content

    def is_container(self) -> bool:
        """Return whether the process runs inside a container.

        Returns:
            bool: ``False`` on non-Linux platforms without touching the filesystem; otherwise
            the memoized result of ``has_marker_file() or has_cgroup_marker()``.
        """
        if not self.is_supported_platform():
            return False

        with self._memo_lock:
            if self._memo is None:
                self._memo = self.has_marker_file() or self.has_cgroup_marker()
                LOGGER.debug("Container detection resolved to %s", self._memo)
            return self._memo
