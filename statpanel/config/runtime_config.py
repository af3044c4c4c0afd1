"""Runtime configuration snapshot for the stat panel builder.

A small, typed view of the environment variables statpanel honours:

- STATPANEL_PLUGIN_VERSION: pluginVersion used when the caller passes none.
- STATPANEL_STRICT_INPUTS: reject out-of-range builder inputs.
- STATPANEL_VALIDATE: output schema check mode (off | warn | strict).
- STATPANEL_LOG_LEVEL: root log level for the CLI.

With none of them set the builder behaves exactly as its defaults describe.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from statpanel.utils.env_flags import is_truthy

__all__ = [
    "DEFAULT_PLUGIN_VERSION",
    "VALIDATE_MODES",
    "RuntimeConfig",
    "build_runtime_config",
    "get_runtime_config",
]

DEFAULT_PLUGIN_VERSION = "7"
VALIDATE_MODES = ("off", "warn", "strict")

@dataclass(frozen=True)
class RuntimeConfig:
    default_plugin_version: str
    strict_inputs: bool
    validate_mode: str
    log_level: str

_singleton: RuntimeConfig | None = None

def _coerce_str(val: str | None, default: str) -> str:
    if val is None or not val.strip():
        return default
    return val.strip()

def _coerce_bool(val: str | None, default: bool) -> bool:
    if val is None:
        return default
    return is_truthy(val)

def _coerce_mode(val: str | None) -> str:
    mode = _coerce_str(val, "warn").lower()
    if mode not in VALIDATE_MODES:
        mode = "warn"
    return mode

def build_runtime_config() -> RuntimeConfig:
    return RuntimeConfig(
        default_plugin_version=_coerce_str(os.getenv("STATPANEL_PLUGIN_VERSION"), DEFAULT_PLUGIN_VERSION),
        strict_inputs=_coerce_bool(os.getenv("STATPANEL_STRICT_INPUTS"), False),
        validate_mode=_coerce_mode(os.getenv("STATPANEL_VALIDATE")),
        log_level=_coerce_str(os.getenv("STATPANEL_LOG_LEVEL"), "INFO").upper(),
    )

def get_runtime_config(refresh: bool = False) -> RuntimeConfig:
    global _singleton
    if _singleton is None or refresh:
        _singleton = build_runtime_config()
    return _singleton
