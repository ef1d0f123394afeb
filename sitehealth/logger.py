"""Loguru logging for sitehealth.

Modules obtain a logger with ``get_logger(__name__)``; the bound ``mod_name``
extra is what the console format prints. Call ``configure_logging`` once from
an entry point (the CLI does); libraries embedding sitehealth can leave
loguru's default sink alone.
"""

import sys

import typing as t
from loguru import logger as _logger

LOG_FORMAT: dict[str, str] = {
    "time": "<b><e>[</e> <w>{time:YYYY-MM-DD HH:mm:ss.SSS}</w> <e>]</e></b>",
    "level": " <level>{level:>8}</level>",
    "sep": " <b><w>in</w></b> ",
    "name": "<b>{extra[mod_name]:>20}</b>",
    "line": "<b><e>[</e><w>{line:^5}</w><e>]</e></b>",
    "message": "  <level>{message}</level>",
}

_handler_id: int | None = None


def _short_name(name: str) -> str:
    return name.removeprefix("sitehealth.") or name


def get_logger(name: str = "sitehealth") -> t.Any:
    return _logger.bind(mod_name=_short_name(name))


def configure_logging(
    level: str = "INFO",
    *,
    colorize: bool | None = None,
    sink: t.Any = None,
) -> int:
    """Install a single sink with the sitehealth format.

    Replaces the sink installed by a previous call; returns the loguru
    handler id.
    """
    global _handler_id

    if _handler_id is not None:
        _logger.remove(_handler_id)
    else:
        _logger.remove()
    _handler_id = _logger.add(
        sink or sys.stderr,
        level=level.upper(),
        format="".join(LOG_FORMAT.values()),
        colorize=colorize,
        backtrace=False,
        diagnose=False,
        filter=_ensure_mod_name,
    )
    return _handler_id


def _ensure_mod_name(record: dict[str, t.Any]) -> bool:
    # Records from unbound loggers would otherwise break the format
    record["extra"].setdefault("mod_name", _short_name(record["name"] or ""))
    return True


__all__ = ["LOG_FORMAT", "configure_logging", "get_logger"]
