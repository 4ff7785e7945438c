"""
Log module for script engine: info, warn, error, debug.

Records go to the ``jailbox.script`` logger tagged with the invocation's
entry point and scratch scope id.
"""

import logging
from types import SimpleNamespace
from typing import Any

logger = logging.getLogger("jailbox.script")


def make_log_module(
    *,
    logger_instance: logging.Logger | None = None,
    extra: dict[str, Any] | None = None,
) -> Any:
    """Build the `log` object: info, warn, error, debug. extra is attached to every record."""
    log = logger_instance or logger
    ext = extra or {}

    def _log(level: int, msg: Any, *args: Any) -> None:
        log.log(level, str(msg), *args, extra=ext)

    def info(msg: Any, *args: Any) -> None:
        _log(logging.INFO, msg, *args)

    def warn(msg: Any, *args: Any) -> None:
        _log(logging.WARNING, msg, *args)

    def error(msg: Any, *args: Any) -> None:
        _log(logging.ERROR, msg, *args)

    def debug(msg: Any, *args: Any) -> None:
        _log(logging.DEBUG, msg, *args)

    return SimpleNamespace(info=info, warn=warn, error=error, debug=debug)
