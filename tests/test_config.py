# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskboard.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("APP_NAME", "LOG_LEVEL", "LOG_DIR", "DATABASE_URL", "HOST", "PORT", "CLIENT_URLS"):
        monkeypatch.delenv(f"TASKBOARD_{name}", raising=False)

    s = Settings.from_env()
    assert s.app_name == "taskboard"
    assert s.log_level == "INFO"
    assert s.log_dir is None
    assert s.database_url == "sqlite:///./taskboard.db"
    assert s.port == 5000
    assert s.client_urls == ["http://localhost:5173"]


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKBOARD_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKBOARD_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("TASKBOARD_PORT", "8080")
    monkeypatch.setenv("TASKBOARD_CLIENT_URLS", "http://a.test, http://b.test")

    s = Settings.from_env()
    assert s.log_level == "DEBUG"
    assert s.log_dir == tmp_path
    assert s.port == 8080
    assert s.client_urls == ["http://a.test", "http://b.test"]


def test_bad_port_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKBOARD_PORT", "not-a-port")
    assert Settings.from_env().port == 5000
