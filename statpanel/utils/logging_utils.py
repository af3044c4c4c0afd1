"""Unified logging setup for statpanel tools."""
from __future__ import annotations

import json
import logging
import sys
import time

from statpanel.utils.env_flags import is_truthy_env

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
# Minimal console format (message only) used for cleaner terminal output.
MINIMAL_CONSOLE_FORMAT = '%(message)s'
HANDLER_MARK = '_statpanel_console'


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            'ts': getattr(record, 'created', time.time()),
            'level': record.levelname,
            'logger': record.name,
            'msg': record.getMessage(),
        }
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(level: str = 'INFO', fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Configure root logging.

    Console handler writes to stderr so stdout stays reserved for generated
    JSON. Message-only format is the default; STATPANEL_VERBOSE_CONSOLE=1
    restores DEFAULT_FORMAT and STATPANEL_JSON_LOGS=1 switches to one JSON
    object per line. An explicit fmt argument beats the env toggles.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    # Replace our own handler on re-init; handlers owned by others stay put
    for h in root.handlers[:]:
        if getattr(h, HANDLER_MARK, False):
            root.removeHandler(h)
            h.close()

    if fmt != DEFAULT_FORMAT:
        console_fmt = fmt
    elif is_truthy_env('STATPANEL_VERBOSE_CONSOLE'):
        console_fmt = DEFAULT_FORMAT
    else:
        console_fmt = MINIMAL_CONSOLE_FORMAT

    console = logging.StreamHandler(sys.stderr)
    setattr(console, HANDLER_MARK, True)
    console.setLevel(log_level)
    if is_truthy_env('STATPANEL_JSON_LOGS'):
        console.setFormatter(JsonFormatter())
    else:
        console.setFormatter(logging.Formatter(console_fmt))
    root.addHandler(console)
    return root


__all__ = ["DEFAULT_FORMAT", "MINIMAL_CONSOLE_FORMAT", "HANDLER_MARK", "JsonFormatter", "setup_logging"]
