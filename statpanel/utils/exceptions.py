"""statpanel exception hierarchy.

A small exception tree so callers can tell rejected panel inputs apart from
alphabet exhaustion and from malformed definition files.
"""
from __future__ import annotations


class StatPanelError(Exception):
    """Base class for all statpanel exceptions."""


class PanelValidationError(StatPanelError, ValueError):
    """Panel inputs or output rejected by strict validation."""


class RefIdExhaustedError(StatPanelError, IndexError):
    """No letter left in A-Z for the next target refId."""


class DefinitionLoadError(StatPanelError):
    """Panel definition file unreadable or not matching its schema."""


__all__ = [
    "StatPanelError",
    "PanelValidationError",
    "RefIdExhaustedError",
    "DefinitionLoadError",
]
