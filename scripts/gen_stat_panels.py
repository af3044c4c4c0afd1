#!/usr/bin/env python3
"""Generate Grafana stat panel JSON from a YAML definition file.

Reads panel definitions (see statpanel.panels.loader for the layout),
builds each panel, runs the output schema check and prints the resulting JSON
array to stdout, ready to drop into a dashboard's ``panels`` list.

Exit codes:
    0 success
    1 definition file unreadable or invalid
    2 strict validation failure
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from statpanel.config.runtime_config import VALIDATE_MODES, get_runtime_config
from statpanel.panels.loader import build_panels, load_definitions
from statpanel.panels.stat import panel_list_to_json
from statpanel.panels.validate import runtime_validate_panel
from statpanel.utils.exceptions import DefinitionLoadError, PanelValidationError, RefIdExhaustedError
from statpanel.utils.logging_utils import setup_logging

logger = logging.getLogger("gen_stat_panels")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    cfg = get_runtime_config()
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("--definitions", required=True, help="YAML panel definition file")
    ap.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    ap.add_argument("--validate", choices=VALIDATE_MODES, default=cfg.validate_mode)
    ap.add_argument("--strict-inputs", action="store_true", default=None,
                    help="reject out-of-range builder options")
    ap.add_argument("--log-level", default=cfg.log_level)
    return ap.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    try:
        definitions = load_definitions(args.definitions)
        panels = build_panels(definitions, strict=args.strict_inputs)
    except (DefinitionLoadError, RefIdExhaustedError) as e:
        logger.error("[gen-stat-panels] %s", e)
        return 1
    except PanelValidationError as e:
        logger.error("[gen-stat-panels] invalid panel options: %s", e)
        return 1
    try:
        for panel in panels:
            runtime_validate_panel(panel.to_dict(), mode=args.validate)
    except PanelValidationError as e:
        logger.error("[gen-stat-panels] %s", e)
        return 2
    sys.stdout.write(panel_list_to_json(panels, indent=args.indent or None) + "\n")
    logger.info("[gen-stat-panels] Generated %d panels from %s", len(panels), args.definitions)
    return 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
