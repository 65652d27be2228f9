import json
import logging
from enum import Enum
from typing import Any

import typer
import yaml


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class OutputFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"


LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "success": 25,  # Custom level between info and warning
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

COLORS = {
    "success": typer.colors.GREEN,
    "warning": typer.colors.YELLOW,
    "error": typer.colors.RED,
    "debug": typer.colors.BRIGHT_BLACK,  # Dim/Gray for debug
}


def _level_name(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warning"
    if levelno > logging.INFO:
        return "success"
    if levelno > logging.DEBUG:
        return "info"
    return "debug"


class CliRenderer(logging.Handler):
    """
    Renders CLI messages and library log records through one level filter.

    Installed on the "warden" logger by the CLI, so store and loader debug
    records come out coloured alongside the command's own messages.
    """

    def __init__(self, loglevel: LogLevel = LogLevel.INFO):
        super().__init__(level=LEVEL_MAP[loglevel.value])
        self.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    def render(self, message: str, level: str):
        if LEVEL_MAP.get(level, 0) < self.level:
            return
        # Diagnostics go to stderr so piped output stays parseable
        err = level not in ("info", "success")
        typer.secho(message, fg=COLORS.get(level), err=err)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.render(self.format(record), _level_name(record.levelno))
        except Exception:
            self.handleError(record)


def install(renderer: CliRenderer, logger_name: str = "warden") -> None:
    """Attaches `renderer` to the library logger, replacing a previous one."""
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        if isinstance(handler, CliRenderer):
            logger.removeHandler(handler)
    logger.addHandler(renderer)
    logger.setLevel(renderer.level)


def format_value(value: Any, output: OutputFormat) -> str:
    if output is OutputFormat.YAML:
        return yaml.safe_dump(
            value, allow_unicode=True, default_flow_style=False, sort_keys=False
        ).rstrip("\n")
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)
