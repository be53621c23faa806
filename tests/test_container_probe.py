"""Tests for container detection probes."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from envkit.container import ContainerProbe


def _probe(tmp_path: Path, *, marker: bool = False, cgroup: str | None = None, platform: str = "linux") -> ContainerProbe:
    marker_path = tmp_path / ".dockerenv"
    cgroup_path = tmp_path / "cgroup"
    if marker:
        marker_path.write_text("", encoding="utf-8")
    if cgroup is not None:
        cgroup_path.write_text(cgroup, encoding="utf-8")
    return ContainerProbe(marker_path=marker_path, cgroup_path=cgroup_path, platform=platform)


def test_has_marker_file_on_linux(tmp_path: Path) -> None:
    assert _probe(tmp_path, marker=True).has_marker_file() is True


def test_has_marker_file_false_when_missing(tmp_path: Path) -> None:
    assert _probe(tmp_path).has_marker_file() is False


def test_has_marker_file_false_off_linux(tmp_path: Path) -> None:
    assert _probe(tmp_path, marker=True, platform="win32").has_marker_file() is False


def test_has_marker_file_swallows_os_errors(tmp_path: Path) -> None:
    probe = _probe(tmp_path)
    with patch.object(Path, "exists", side_effect=PermissionError("denied")):
        assert probe.has_marker_file() is False


def test_has_cgroup_marker_detects_token(tmp_path: Path) -> None:
    assert _probe(tmp_path, cgroup="12:cpu:/docker/abc123\n").has_cgroup_marker() is True


def test_has_cgroup_marker_false_without_token(tmp_path: Path) -> None:
    assert _probe(tmp_path, cgroup="0::/init.scope\n").has_cgroup_marker() is False


def test_has_cgroup_marker_false_when_file_missing(tmp_path: Path) -> None:
    assert _probe(tmp_path).has_cgroup_marker() is False


def test_has_cgroup_marker_false_off_linux(tmp_path: Path) -> None:
    assert _probe(tmp_path, cgroup="docker", platform="darwin").has_cgroup_marker() is False


def test_has_cgroup_marker_uses_custom_token(tmp_path: Path) -> None:
    probe = _probe(tmp_path, cgroup="0::/kubepods/pod1\n")
    probe.marker_token = "kubepods"
    assert probe.has_cgroup_marker() is True


@pytest.mark.parametrize(
    ("marker", "cgroup", "expected"),
    [
        (True, None, True),
        (False, "docker", True),
        (True, "docker", True),
        (False, "plain", False),
        (False, None, False),
    ],
)
def test_is_container_combines_probes(tmp_path: Path, marker: bool, cgroup: str | None, expected: bool) -> None:
    assert _probe(tmp_path, marker=marker, cgroup=cgroup).is_container() is expected


def test_is_container_off_linux_never_touches_filesystem(tmp_path: Path) -> None:
    probe = _probe(tmp_path, marker=True, platform="win32")
    with patch.object(ContainerProbe, "has_marker_file") as marker, patch.object(
        ContainerProbe, "has_cgroup_marker"
    ) as cgroup:
        assert probe.is_container() is False
    marker.assert_not_called()
    cgroup.assert_not_called()


def test_is_container_is_memoized(tmp_path: Path) -> None:
    probe = _probe(tmp_path, marker=True)
    assert probe.is_container() is True

    (tmp_path / ".dockerenv").unlink()
    assert probe.has_marker_file() is False
    assert probe.is_container() is True


def test_is_container_memoizes_negative_result(tmp_path: Path) -> None:
    probe = _probe(tmp_path)
    assert probe.is_container() is False

    (tmp_path / ".dockerenv").write_text("", encoding="utf-8")
    with patch.object(ContainerProbe, "has_marker_file") as marker:
        assert probe.is_container() is False
    marker.assert_not_called()


def test_platform_defaults_to_sys_platform(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    probe = ContainerProbe(marker_path=tmp_path / ".dockerenv", cgroup_path=tmp_path / "cgroup")
    (tmp_path / ".dockerenv").write_text("", encoding="utf-8")

    monkeypatch.setattr(sys, "platform", "win32")
    assert probe.is_supported_platform() is False
    assert probe.has_marker_file() is False

    monkeypatch.setattr(sys, "platform", "linux")
    assert probe.has_marker_file() is True
