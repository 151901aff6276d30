"""Runtime settings and logging setup for the safecalc CLI.

Settings come from SAFECALC_* environment variables; CLI options override
them. Only the caller layer logs, the evaluator core stays silent.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_DISPLAY_WIDTH = 20

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Caller-side knobs. The evaluator itself has none."""

    log_level: str = DEFAULT_LOG_LEVEL
    display_width: int = DEFAULT_DISPLAY_WIDTH


def _parse_log_level(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_LOG_LEVEL
    level = value.strip().upper()
    return level if level in _LOG_LEVELS else DEFAULT_LOG_LEVEL


def _parse_width(value: Optional[str]) -> int:
    try:
        width = int(value) if value else DEFAULT_DISPLAY_WIDTH
    except ValueError:
        return DEFAULT_DISPLAY_WIDTH
    return width if width > 0 else DEFAULT_DISPLAY_WIDTH


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from an env mapping (defaults to os.environ).

    Unparseable values fall back to the defaults instead of failing.
    """
    env = os.environ if env is None else env
    return Settings(
        log_level=_parse_log_level(env.get("SAFECALC_LOG_LEVEL")),
        display_width=_parse_width(env.get("SAFECALC_DISPLAY_WIDTH")),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL, console: Optional[Console] = None) -> None:
    """Route the safecalc logger through a RichHandler on stderr.

    Safe to call repeatedly; only the level changes after the first call.
    """
    logger = logging.getLogger("safecalc")
    logger.setLevel(_parse_log_level(level))
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
