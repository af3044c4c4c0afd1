"""Typed shapes of the stat panel document.

Only the parts the builder itself writes are described. Targets, links and
mappings are caller-owned and stay loose (dict[str, Any]).
"""
from __future__ import annotations

from typing import Any, Literal, TypedDict

Orientation = Literal["auto", "horizontal", "vertical"]
ColorMode = Literal["value", "background"]
GraphMode = Literal["none", "area"]
JustifyMode = Literal["auto", "center"]
ThresholdsMode = Literal["absolute", "percentage"]
RepeatDirection = Literal["h", "v"]


class ThresholdStep(TypedDict):
    color: str
    value: float | None


class Thresholds(TypedDict):
    mode: ThresholdsMode
    steps: list[ThresholdStep]


class FieldDefaults(TypedDict, total=False):
    unit: str
    min: float
    max: float
    decimals: int
    displayName: str
    noValue: str
    thresholds: Thresholds
    mappings: list[dict[str, Any]]
    links: list[dict[str, Any]]


class ReduceOptions(TypedDict, total=False):
    values: bool
    limit: int
    calcs: list[str]
    fields: str


class LegacyFieldOptions(ReduceOptions, total=False):
    defaults: FieldDefaults


class FieldConfig(TypedDict):
    defaults: FieldDefaults


class StatOptions(TypedDict, total=False):
    # modern panels carry reduceOptions, legacy panels fieldOptions
    reduceOptions: ReduceOptions
    fieldOptions: LegacyFieldOptions
    orientation: Orientation
    colorMode: ColorMode
    graphMode: GraphMode
    justifyMode: JustifyMode


class StatPanelDict(TypedDict, total=False):
    type: Literal["stat"]
    title: str
    description: str
    transparent: bool
    datasource: Any
    targets: list[dict[str, Any]]
    links: list[dict[str, Any]]
    repeat: str
    repeatDirection: RepeatDirection
    repeatMaxPerRow: int | None
    pluginVersion: str
    options: StatOptions
    fieldConfig: FieldConfig


__all__ = [
    "Orientation",
    "ColorMode",
    "GraphMode",
    "JustifyMode",
    "ThresholdsMode",
    "RepeatDirection",
    "ThresholdStep",
    "Thresholds",
    "FieldDefaults",
    "ReduceOptions",
    "LegacyFieldOptions",
    "FieldConfig",
    "StatOptions",
    "StatPanelDict",
]
