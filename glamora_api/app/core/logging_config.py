"""
Logging setup shared by the application and the uvicorn server.

``setup_logging`` installs one console handler (plus a file handler
when ``LOG_FILE`` is set) on the root logger and strips uvicorn's own
handlers so server, access and application records all come out in
the same format.  ``run.py`` starts uvicorn with ``log_config=None``
so the server does not install its handlers again.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

CONSOLE_HANDLER = "glamora.console"
FILE_HANDLER = "glamora.file"


def _find_handler(logger: logging.Logger, name: str) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == name:
            return handler
    return None


def _attach(logger: logging.Logger, handler: logging.Handler, name: str) -> None:
    handler.set_name(name)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger and hand uvicorn's loggers to it.

    Handlers are tagged by name, so repeated calls (one per
    ``create_app``) neither duplicate output nor disturb handlers that
    other tools such as pytest attach to the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``), case
        insensitive.  Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file to copy every record to.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if _find_handler(root, CONSOLE_HANDLER) is None:
        _attach(root, logging.StreamHandler(), CONSOLE_HANDLER)

    if logfile:
        log_path = str(Path(logfile).resolve())
        current = _find_handler(root, FILE_HANDLER)
        if current is not None and current.baseFilename != log_path:
            root.removeHandler(current)
            current.close()
            current = None
        if current is None:
            _attach(root, logging.FileHandler(log_path, encoding="utf-8"), FILE_HANDLER)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
