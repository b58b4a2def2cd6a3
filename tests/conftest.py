# tests/conftest.py
from __future__ import annotations

import pytest

from numpart.runtime import reset


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Point the workspace at a temp dir and start every test with a fresh runtime."""
    ws = tmp_path / "Numpart"
    monkeypatch.setenv("NUMPART_HOME", str(ws))
    reset()
    return ws
