"""Shared test fixtures."""

from __future__ import annotations

import io
import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from crun.transcript import Transcript


@pytest.fixture
def installed(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Pretends that exactly the given commands are on the search path."""

    def install(*commands: str) -> None:
        monkeypatch.setattr(
            shutil,
            "which",
            lambda cmd, *args, **kwargs: f"/usr/bin/{cmd}" if cmd in commands else None,
        )

    return install


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def transcript() -> Transcript:
    return Transcript(stream=io.StringIO())
