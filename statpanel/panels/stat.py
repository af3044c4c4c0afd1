"""Stat panel builder.

`new()` assembles a complete Grafana "stat" panel document; the `add_*`
methods on the returned `StatPanel` append targets, links, threshold steps,
value mappings and data links. Every append returns a new `StatPanel` and
leaves the receiver untouched, so one base panel can be branched into many
variants:

    base = new("Requests", unit="reqps").add_link({"title": "Runbook", "url": "..."})
    p95 = base.add_target({"expr": "histogram_quantile(0.95, ...)"})
    p99 = base.add_target({"expr": "histogram_quantile(0.99, ...)"})

Two document shapes exist. The branch is picked once, at creation, by
comparing the plugin version token with "7" as plain strings:

* ``"7"`` and anything sorting after it get ``options.reduceOptions`` plus
  ``fieldConfig.defaults``.
* Anything sorting before it (``"6.7"``, but also ``"10.0"``) gets
  ``options.fieldOptions`` with ``defaults`` nested inside and no
  ``fieldConfig``.
"""
from __future__ import annotations

import copy
import json
import logging
import re
import string
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Any, cast

from statpanel.config.runtime_config import get_runtime_config
from statpanel.panels.models import (
    ColorMode,
    FieldDefaults,
    GraphMode,
    JustifyMode,
    Orientation,
    RepeatDirection,
    StatPanelDict,
    ThresholdsMode,
)
from statpanel.panels.validate import check_stat_options
from statpanel.utils.exceptions import RefIdExhaustedError

logger = logging.getLogger(__name__)

MODERN_SCHEMA_MIN_VERSION = "7"
REF_ID_LETTERS = string.ascii_uppercase

_MAJOR_RE = re.compile(r"\s*v?(\d+)")


def is_modern_version(plugin_version: Any) -> bool:
    """True when the token takes the reduceOptions/fieldConfig shape (string compare)."""
    return str(plugin_version) >= MODERN_SCHEMA_MIN_VERSION


def _numeric_major(token: str) -> int | None:
    m = _MAJOR_RE.match(token)
    return int(m.group(1)) if m else None


def _ref_id(position: int) -> str:
    try:
        return REF_ID_LETTERS[position]
    except IndexError as e:
        raise RefIdExhaustedError(
            f"no refId left for target #{position + 1}; only {len(REF_ID_LETTERS)} letters available"
        ) from e


def _set_if(target: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        target[key] = value


def _defaults_block(doc: dict[str, Any], legacy: bool) -> dict[str, Any]:
    if legacy:
        return doc["options"]["fieldOptions"]["defaults"]
    return doc["fieldConfig"]["defaults"]


@dataclass(frozen=True)
class StatPanel:
    """Immutable stat panel value.

    `_doc` is the document that gets serialized; read it through `to_dict()`,
    which hands out a copy. The two counters are builder state only and never
    appear in `to_dict()`. Hashing covers the shape flag and counters only.
    """

    _doc: dict[str, Any] = field(hash=False)
    legacy: bool = False
    next_target: int = 0
    next_mapping: int = 0

    # -------------------- Targets --------------------
    def add_target(self, target: Mapping[str, Any]) -> StatPanel:
        ref_id = _ref_id(self.next_target)
        item = copy.deepcopy(dict(target))
        item["refId"] = ref_id
        doc = copy.deepcopy(self._doc)
        doc["targets"].append(item)
        logger.debug("stat panel %r: target refId=%s", self.title, ref_id)
        return replace(self, _doc=doc, next_target=self.next_target + 1)

    def add_targets(self, targets: Iterable[Mapping[str, Any]]) -> StatPanel:
        return reduce(lambda panel, t: panel.add_target(t), targets, self)

    # -------------------- Panel links --------------------
    def add_link(self, link: Mapping[str, Any]) -> StatPanel:
        doc = copy.deepcopy(self._doc)
        doc["links"].append(copy.deepcopy(dict(link)))
        return replace(self, _doc=doc)

    def add_links(self, links: Iterable[Mapping[str, Any]]) -> StatPanel:
        return reduce(lambda panel, link: panel.add_link(link), links, self)

    # -------------------- Field defaults --------------------
    def add_threshold(self, step: Mapping[str, Any]) -> StatPanel:
        doc = copy.deepcopy(self._doc)
        _defaults_block(doc, self.legacy)["thresholds"]["steps"].append(copy.deepcopy(dict(step)))
        return replace(self, _doc=doc)

    def add_thresholds(self, steps: Iterable[Mapping[str, Any]]) -> StatPanel:
        return reduce(lambda panel, step: panel.add_threshold(step), steps, self)

    def add_mapping(self, mapping: Mapping[str, Any]) -> StatPanel:
        item = copy.deepcopy(dict(mapping))
        item["id"] = self.next_mapping
        doc = copy.deepcopy(self._doc)
        _defaults_block(doc, self.legacy)["mappings"].append(item)
        logger.debug("stat panel %r: mapping id=%d", self.title, self.next_mapping)
        return replace(self, _doc=doc, next_mapping=self.next_mapping + 1)

    def add_mappings(self, mappings: Iterable[Mapping[str, Any]]) -> StatPanel:
        return reduce(lambda panel, m: panel.add_mapping(m), mappings, self)

    def add_data_link(self, link: Mapping[str, Any]) -> StatPanel:
        doc = copy.deepcopy(self._doc)
        _defaults_block(doc, self.legacy)["links"].append(copy.deepcopy(dict(link)))
        return replace(self, _doc=doc)

    def add_data_links(self, links: Iterable[Mapping[str, Any]]) -> StatPanel:
        return reduce(lambda panel, link: panel.add_data_link(link), links, self)

    # -------------------- Read access --------------------
    @property
    def title(self) -> str:
        return self._doc["title"]

    @property
    def plugin_version(self) -> Any:
        return self._doc["pluginVersion"]

    @property
    def is_legacy(self) -> bool:
        return self.legacy

    @property
    def targets(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self._doc["targets"])

    @property
    def links(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self._doc["links"])

    @property
    def defaults(self) -> FieldDefaults:
        """Copy of the field defaults block, wherever the schema keeps it."""
        return cast(FieldDefaults, copy.deepcopy(_defaults_block(self._doc, self.legacy)))

    def to_dict(self) -> StatPanelDict:
        return cast(StatPanelDict, copy.deepcopy(self._doc))

    def to_json(self, indent: int | None = None, sort_keys: bool = False) -> str:
        return json.dumps(self._doc, indent=indent, sort_keys=sort_keys)


def new(
    title: str,
    *,
    description: str | None = None,
    transparent: bool = False,
    datasource: Any = None,
    all_values: bool = False,
    value_limit: int | None = None,
    reducer_function: str = "mean",
    fields: str = "",
    orientation: Orientation = "auto",
    color_mode: ColorMode = "value",
    graph_mode: GraphMode = "area",
    justify_mode: JustifyMode = "auto",
    unit: str = "none",
    min: float | None = None,  # noqa: A002
    max: float | None = None,  # noqa: A002
    decimals: int | None = None,
    display_name: str | None = None,
    no_value: str | None = None,
    thresholds_mode: ThresholdsMode = "absolute",
    repeat: str | None = None,
    repeat_direction: RepeatDirection = "h",
    repeat_max_per_row: int | None = None,
    plugin_version: Any = None,
    strict: bool | None = None,
) -> StatPanel:
    """Create a stat panel.

    Parameters left at None are omitted from the document rather than
    emitted as null (``datasource`` excepted, which is always present).
    ``value_limit`` is only emitted when ``all_values`` is set. The repeat
    trio (``repeat``, ``repeatDirection``, ``repeatMaxPerRow``) is emitted
    only when ``repeat`` is given.

    ``plugin_version`` defaults to STATPANEL_PLUGIN_VERSION, else "7".
    ``strict`` defaults to STATPANEL_STRICT_INPUTS; when on, out-of-range
    inputs raise PanelValidationError instead of passing through.
    """
    cfg = get_runtime_config()
    if plugin_version is None:
        plugin_version = cfg.default_plugin_version
    if strict is None:
        strict = cfg.strict_inputs
    if strict:
        check_stat_options(
            title=title,
            value_limit=value_limit,
            orientation=orientation,
            color_mode=color_mode,
            graph_mode=graph_mode,
            justify_mode=justify_mode,
            thresholds_mode=thresholds_mode,
            repeat_direction=repeat_direction,
        )

    token = str(plugin_version)
    legacy = not is_modern_version(token)
    major = _numeric_major(token)
    if legacy and major is not None and major >= 7:
        logger.warning(
            "pluginVersion %r sorts below %r as a string and gets the legacy fieldOptions shape",
            token, MODERN_SCHEMA_MIN_VERSION,
        )

    reduce_options: dict[str, Any] = {"values": all_values}
    if all_values and value_limit is not None:
        reduce_options["limit"] = value_limit
    reduce_options["calcs"] = [reducer_function]
    reduce_options["fields"] = fields

    defaults: dict[str, Any] = {"unit": unit}
    _set_if(defaults, "min", min)
    _set_if(defaults, "max", max)
    _set_if(defaults, "decimals", decimals)
    _set_if(defaults, "displayName", display_name)
    _set_if(defaults, "noValue", no_value)
    defaults["thresholds"] = {"mode": thresholds_mode, "steps": []}
    defaults["mappings"] = []
    defaults["links"] = []

    doc: dict[str, Any] = {"type": "stat", "title": title}
    _set_if(doc, "description", description)
    doc["transparent"] = transparent
    doc["datasource"] = datasource
    doc["targets"] = []
    doc["links"] = []
    if repeat is not None:
        doc["repeat"] = repeat
        doc["repeatDirection"] = repeat_direction
        doc["repeatMaxPerRow"] = repeat_max_per_row
    doc["pluginVersion"] = plugin_version

    display = {
        "orientation": orientation,
        "colorMode": color_mode,
        "graphMode": graph_mode,
        "justifyMode": justify_mode,
    }
    if legacy:
        reduce_options["defaults"] = defaults
        doc["options"] = {"fieldOptions": reduce_options, **display}
    else:
        doc["options"] = {"reduceOptions": reduce_options, **display}
        doc["fieldConfig"] = {"defaults": defaults}

    logger.debug("stat panel %r: pluginVersion=%r schema=%s", title, token, "legacy" if legacy else "modern")
    return StatPanel(_doc=doc, legacy=legacy)


def panel_list_to_json(panels: Sequence[StatPanel], indent: int | None = 2) -> str:
    """Serialize panels as a JSON array, ready for a dashboard's ``panels`` list."""
    return json.dumps([p.to_dict() for p in panels], indent=indent)


__all__ = [
    "MODERN_SCHEMA_MIN_VERSION",
    "REF_ID_LETTERS",
    "StatPanel",
    "is_modern_version",
    "new",
    "panel_list_to_json",
]
