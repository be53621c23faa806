"""Default constants for envkit.

"""

from __future__ import annotations

from typing import FrozenSet

TRUTHY_TOKENS: FrozenSet[str] = frozenset({"true", "1"})
ARRAY_SEPARATOR = ","

LINUX_PLATFORM_PREFIX = "linux"
CONTAINER_MARKER_PATH = "/.dockerenv"
CONTAINER_CGROUP_PATH = "/proc/self/cgroup"
CONTAINER_CGROUP_TOKEN = "docker"
