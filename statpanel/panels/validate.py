"""Stat panel validation helpers.

Two independent layers:

* `check_stat_options` - input hardening for `stat.new()`, only run in strict
  mode. Well-formed inputs pass through untouched.
* JSON Schema checks of built documents against
  ``schema/stat_panel.schema.json`` (and of YAML definition files against
  ``schema/panel_definitions.schema.json``).
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema

from statpanel.config.runtime_config import VALIDATE_MODES, get_runtime_config
from statpanel.utils.exceptions import PanelValidationError

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schema"

ORIENTATIONS = frozenset({"auto", "horizontal", "vertical"})
COLOR_MODES = frozenset({"value", "background"})
GRAPH_MODES = frozenset({"none", "area"})
JUSTIFY_MODES = frozenset({"auto", "center"})
THRESHOLDS_MODES = frozenset({"absolute", "percentage"})
REPEAT_DIRECTIONS = frozenset({"h", "v"})

_SCHEMAS: dict[str, Any] = {}


def load_schema(name: str) -> dict[str, Any]:
    if name not in _SCHEMAS:
        with (SCHEMA_DIR / name).open("r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def check_stat_options(
    *,
    title: Any,
    value_limit: Any = None,
    orientation: str = "auto",
    color_mode: str = "value",
    graph_mode: str = "area",
    justify_mode: str = "auto",
    thresholds_mode: str = "absolute",
    repeat_direction: str = "h",
) -> None:
    """Raise PanelValidationError listing every out-of-range option."""
    problems: list[str] = []
    if not isinstance(title, str) or not title.strip():
        problems.append("title must be non-empty text")
    if value_limit is not None and (
        isinstance(value_limit, bool) or not isinstance(value_limit, int) or value_limit <= 0
    ):
        problems.append(f"value_limit must be a positive integer, got {value_limit!r}")
    for label, value, allowed in (
        ("orientation", orientation, ORIENTATIONS),
        ("color_mode", color_mode, COLOR_MODES),
        ("graph_mode", graph_mode, GRAPH_MODES),
        ("justify_mode", justify_mode, JUSTIFY_MODES),
        ("thresholds_mode", thresholds_mode, THRESHOLDS_MODES),
        ("repeat_direction", repeat_direction, REPEAT_DIRECTIONS),
    ):
        if value not in allowed:
            problems.append(f"{label} must be one of {sorted(allowed)}, got {value!r}")
    if problems:
        raise PanelValidationError("; ".join(problems))


def schema_errors(payload: Any, schema_name: str = "stat_panel.schema.json") -> list[str]:
    """Return human-readable schema violations (empty list when valid)."""
    validator = jsonschema.Draft7Validator(load_schema(schema_name))
    out: list[str] = []
    for err in sorted(validator.iter_errors(payload), key=lambda e: list(e.path)):
        path = "/".join(str(p) for p in err.path) or "<root>"
        out.append(f"{path}: {err.message}")
    return out


def validate_panel(payload: dict[str, Any]) -> bool:
    errors = schema_errors(payload)
    if errors:
        logger.error("Stat panel validation failed (%s): %s", payload.get("title"), "; ".join(errors))
        return False
    return True


def runtime_validate_panel(payload: dict[str, Any], mode: str | None = None) -> None:
    """Validate a built panel according to mode.

    Modes (default from STATPANEL_VALIDATE):
      off    -> do nothing
      warn   -> log warning on failure
      strict -> raise PanelValidationError on failure
    Unknown modes fall back to 'warn'.
    """
    if mode is None:
        mode = get_runtime_config().validate_mode
    mode = mode.lower()
    if mode not in VALIDATE_MODES:
        mode = "warn"
    if mode == "off":
        return
    errors = schema_errors(payload)
    if not errors:
        return
    msg = f"stat panel {payload.get('title')!r} failed validation: {'; '.join(errors)}"
    if mode == "strict":
        raise PanelValidationError(msg)
    logger.warning(msg)


__all__ = [
    "SCHEMA_DIR",
    "check_stat_options",
    "load_schema",
    "schema_errors",
    "validate_panel",
    "runtime_validate_panel",
]
