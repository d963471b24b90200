"""Shared pytest fixtures for linkage-audit tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
import structlog

from linkage_audit.models.settings import AuditSettings


@pytest.fixture(autouse=True)
def captured_logs():
    """Route structlog events into a list instead of stdout."""
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture
def make_files(tmp_path: Path) -> Callable[..., list[str]]:
    """Create small files under tmp_path and return their absolute paths."""

    def _make(*relative: str) -> list[str]:
        paths = []
        for rel in relative:
            path = tmp_path / rel.lstrip("/")
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"\x7fELF")
            paths.append(str(path))
        return paths

    return _make


@pytest.fixture
def settings() -> AuditSettings:
    return AuditSettings(workers=4)
