"""Pytest configuration for statpanel.

1. Ensure project root on sys.path (scripts/ is imported by the CLI tests).
2. Isolate each test from STATPANEL_* env vars, the cached runtime config
   and root logging handlers installed by setup_logging().
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from statpanel.config import runtime_config  # noqa: E402

_ENV_VARS = (
    "STATPANEL_PLUGIN_VERSION",
    "STATPANEL_STRICT_INPUTS",
    "STATPANEL_VALIDATE",
    "STATPANEL_LOG_LEVEL",
    "STATPANEL_VERBOSE_CONSOLE",
    "STATPANEL_JSON_LOGS",
    "STATPANEL_VERSION",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    runtime_config.get_runtime_config(refresh=True)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    runtime_config.get_runtime_config(refresh=True)


@pytest.fixture()
def write_definitions(tmp_path):
    """Write YAML text to a temp definition file and return its path."""
    def _write(text: str, name: str = "panels.yml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
