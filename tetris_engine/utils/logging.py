"""
Console logging for the engine and its front ends.

Every module logs through ``logging.getLogger(__name__)``, so configuring the
package logger ("tetris_engine") once at startup covers the whole tree.
main.py calls setup_logger() with the log_level and use_rich settings.

Handlers:
  - rich:  RichHandler with rich tracebacks (default)
  - plain: StreamHandler with a timestamped one-line format
"""

from __future__ import annotations

import logging

DEFAULT_LOGGER_NAME = "tetris_engine"
PLAIN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    *,
    use_rich: bool = True,
    level: str = "info",
) -> logging.Logger:
    """Configure the package logger with a single console handler.

    Calling it again replaces the previous handler instead of stacking a
    second one. Unknown level names fall back to INFO.

    Args:
        name: Logger to configure; child loggers inherit its handler.
        use_rich: Use rich's RichHandler instead of a plain StreamHandler.
        level: Level name, case-insensitive ("debug", "info", ...).

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    handler: logging.Handler
    if use_rich:
        from rich.logging import RichHandler

        # RichHandler renders time, level and source itself
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger.addHandler(handler)
    return logger


__all__ = ["DEFAULT_LOGGER_NAME", "setup_logger"]
