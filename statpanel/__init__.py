"""statpanel: Grafana stat panel configuration builder."""

from .panels.stat import StatPanel, new, panel_list_to_json
from .version import __version__, get_version

__all__ = ["StatPanel", "new", "panel_list_to_json", "__version__", "get_version"]
