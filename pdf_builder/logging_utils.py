"""
Logging setup shared by the pdf_builder CLI and the retirement PDF service.

Every module gets its logger through ``get_logger(__name__)``; only the two
entrypoints call ``setup_logging``.
"""

import logging
from pathlib import Path
from typing import Optional, Union

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chart downloads (requests/urllib3) and image decoding (Pillow, via reportlab)
# log every connection and PNG chunk at DEBUG.
NOISY_LOGGERS = ("urllib3", "PIL")


def resolve_level(level: Union[int, str, None]) -> int:
    """
    Accept ``logging.DEBUG``, ``"debug"`` or ``"DEBUG"``; anything
    unrecognised (or None) means INFO.
    """
    if isinstance(level, int):
        return level
    if level:
        named = logging.getLevelName(str(level).strip().upper())
        if isinstance(named, int):
            return named
    return logging.INFO


def setup_logging(
    level: Union[int, str, None] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    force: bool = False,
) -> None:
    """
    Configure the root logger.

    - Always logs to console (StreamHandler)
    - If log_file is provided, ALSO logs to that file, creating its folder
    - Later calls are ignored unless ``force`` is set (the CLI forces so
      ``--verbose`` wins over an earlier setup)
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    root_level = resolve_level(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=root_level,
        handlers=handlers,
        force=True,  # override any previous root logger config
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
