"""Logging configuration for ambit.

Library modules only ever do::

    import logging
    logger = logging.getLogger(__name__)

and never configure handlers themselves.  The CLI calls
``setup_logging`` once, from the click group callback, which installs a
``rich`` handler on the root logger.
"""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOG_FORMAT = "%(message)s"


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure the root logger with a ``RichHandler``.

    Parameters
    ----------
    verbose:
        When ``True`` the level is ``DEBUG`` and log records show the
        emitting module path; otherwise only ``WARNING`` and above are
        shown so normal command output stays clean.
    console:
        Console the handler writes to.  Defaults to a stderr console.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root_logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        show_time=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root_logger.addHandler(handler)

    logging.getLogger(__name__).debug("Logging initialized (verbose=%s)", verbose)
