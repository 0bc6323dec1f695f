# pylint: disable=all

from pathlib import Path

import pytest
from pytest import MonkeyPatch

from colorbot.console import Console


@pytest.fixture(autouse=True)
def logs_directory(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(Console, "_logs_directory", tmp_path / "logs")
    monkeypatch.setattr(Console, "_file_path", None)
