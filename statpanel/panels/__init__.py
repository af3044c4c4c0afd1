"""Stat panel builder and helpers.

Exposes the `new` factory and the immutable `StatPanel` value.
"""

from .stat import StatPanel, new, panel_list_to_json  # re-export
