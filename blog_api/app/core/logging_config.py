"""
Logging setup.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it is called; later calls
do nothing, so ``create_app`` can run repeatedly in tests.  Records are
formatted as ``timestamp [LEVEL] logger: message``.

pymongo logs every command and pool event at DEBUG level.  Those
loggers are held at WARNING unless the application itself runs at
DEBUG.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
NOISY_LOGGERS = ("pymongo",)


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    noisy: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"`` or ``"info"``.  Unknown names
        fall back to ``INFO``.
    logfile : Optional[str]
        Optional path of a file that receives the same records as the
        console.
    noisy : Iterable[str]
        Logger names capped at WARNING unless ``level`` is DEBUG.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in noisy:
            logging.getLogger(name).setLevel(logging.WARNING)
