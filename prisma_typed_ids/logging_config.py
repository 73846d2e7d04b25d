"""Logging setup shared by every module in the package.

Modules obtain their logger with ``get_logger(__name__)``; handlers are only
installed by ``setup_logging`` so that library use stays silent by default.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "prisma_typed_ids"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the package hierarchy."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: int | str = logging.INFO,
    console: Console | None = None,
    force: bool = False,
) -> logging.Logger:
    """Install a rich handler on the package root logger.

    Args:
        level: Logging level name or number.
        console: Console to log to. Defaults to a stderr console, which keeps
            stdout free for generated output.
        force: Replace handlers installed by an earlier call.

    Returns:
        The package root logger.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    if _configured and not force:
        return root

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.propagate = False

    _configured = True
    return root
