from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

import envkit
from envkit.utils.logging import _reset_handlers, setup_logging


@pytest.fixture(autouse=True)
def _reset_envkit_logger() -> Iterator[None]:
    yield
    root = logging.getLogger("envkit")
    _reset_handlers(root)
    root.propagate = True
    root.setLevel(logging.NOTSET)
    if hasattr(root, "_envkit_signature"):
        delattr(root, "_envkit_signature")


def test_setup_logging_installs_console_handler_only() -> None:
    root = setup_logging(logging.DEBUG)

    assert root.name == "envkit"
    assert root.level == logging.DEBUG
    assert root.propagate is False
    assert [type(handler) for handler in root.handlers] == [logging.StreamHandler]


def test_setup_logging_writes_file_records(tmp_path: Path) -> None:
    logs_dir = tmp_path / "logs"
    setup_logging(logging.DEBUG, logs_dir=logs_dir)

    logging.getLogger("envkit.engine").debug("FOO_BAR is unset")
    for handler in logging.getLogger("envkit").handlers:
        handler.flush()

    content = (logs_dir / "envkit.log").read_text(encoding="utf-8")
    assert "| DEBUG | envkit.engine | FOO_BAR is unset" in content


def test_setup_logging_is_idempotent_for_same_arguments(tmp_path: Path) -> None:
    root = setup_logging(logging.INFO, logs_dir=tmp_path)
    handlers = list(root.handlers)

    setup_logging(logging.INFO, logs_dir=tmp_path)
    assert root.handlers == handlers

    setup_logging(logging.WARNING)
    assert len(root.handlers) == 1
    assert root.handlers[0] not in handlers


def test_package_level_setup_logging_captures_resolution_records(tmp_path: Path) -> None:
    envkit.setup_logging(logging.DEBUG, logs_dir=tmp_path)

    envkit.Environment(environ={}).resolve("ENVKIT_LOG_UNSET", 5)
    for handler in logging.getLogger("envkit").handlers:
        handler.flush()

    content = (tmp_path / "envkit.log").read_text(encoding="utf-8")
    assert "ENVKIT_LOG_UNSET is unset" in content
