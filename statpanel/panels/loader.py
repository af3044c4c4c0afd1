"""Build stat panels from a YAML definition file.

File layout::

    defaults:             # optional; merged under every panel entry
      datasource: Prometheus
      plugin_version: "7"
    panels:
      - title: Requests
        unit: reqps
        targets: [{expr: "sum(rate(http_requests_total[5m]))"}]
        thresholds: [{color: green, value: null}, {color: red, value: 80}]
        mappings: []
        links: []
        data_links: []

Option keys are the keyword arguments of `statpanel.panels.stat.new`. The
list keys are applied in a fixed order: targets, links, thresholds,
mappings, data_links.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from statpanel.panels import stat
from statpanel.panels.validate import schema_errors
from statpanel.utils.exceptions import DefinitionLoadError

logger = logging.getLogger(__name__)

DEFINITIONS_SCHEMA = "panel_definitions.schema.json"

OPTION_KEYS = frozenset({
    "title", "description", "transparent", "datasource", "all_values", "value_limit",
    "reducer_function", "fields", "orientation", "color_mode", "graph_mode", "justify_mode",
    "unit", "min", "max", "decimals", "display_name", "no_value", "thresholds_mode",
    "repeat", "repeat_direction", "repeat_max_per_row", "plugin_version",
})

# (definition key, StatPanel batch method) in application order
LIST_KEYS: tuple[tuple[str, str], ...] = (
    ("targets", "add_targets"),
    ("links", "add_links"),
    ("thresholds", "add_thresholds"),
    ("mappings", "add_mappings"),
    ("data_links", "add_data_links"),
)


def load_definitions(path: str | Path) -> dict[str, Any]:
    """Load and schema-check a definition file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise DefinitionLoadError(f"cannot read panel definitions {path}: {e}") from e
    if data is None:
        data = {}
    errors = schema_errors(data, DEFINITIONS_SCHEMA)
    if errors:
        raise DefinitionLoadError(f"{path}: " + "; ".join(errors))
    logger.debug("Loaded %d panel definitions from %s", len(data.get("panels") or []), path)
    return data


def _unknown_keys(entry: dict[str, Any], allowed: frozenset[str]) -> list[str]:
    return sorted(k for k in entry if k not in allowed)


def build_panel(entry: dict[str, Any], defaults: dict[str, Any] | None = None, strict: bool | None = None) -> stat.StatPanel:
    list_names = frozenset(name for name, _ in LIST_KEYS)
    unknown = _unknown_keys(entry, OPTION_KEYS | list_names)
    if unknown:
        raise DefinitionLoadError(f"panel {entry.get('title')!r}: unknown keys {unknown}")
    options = dict(defaults or {})
    options.update({k: v for k, v in entry.items() if k in OPTION_KEYS})
    if "title" not in options:
        raise DefinitionLoadError("panel definition without title")
    title = options.pop("title")
    panel = stat.new(title, strict=strict, **options)
    for key, method in LIST_KEYS:
        items = entry.get(key) or []
        if items:
            panel = getattr(panel, method)(items)
    return panel


def build_panels(definitions: dict[str, Any], strict: bool | None = None) -> list[stat.StatPanel]:
    defaults = definitions.get("defaults") or {}
    unknown = _unknown_keys(defaults, OPTION_KEYS)
    if unknown:
        raise DefinitionLoadError(f"defaults: unknown keys {unknown}")
    panels = [build_panel(entry, defaults, strict=strict) for entry in definitions.get("panels") or []]
    logger.info("Built %d stat panels", len(panels))
    return panels


__all__ = ["OPTION_KEYS", "LIST_KEYS", "load_definitions", "build_panel", "build_panels"]
