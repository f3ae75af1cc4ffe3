from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, TextIO

DEFAULT_LOG_PATH = "/var/log/debian-autosetup.log"

_RESET = "\033[0m"
_SECTION_COLOR = "\033[1;34m"
_NOTICE_COLOR = "\033[1;36m"

_LEVEL_STYLE = {
    logging.DEBUG: ("[.]", "\033[2m"),
    logging.INFO: ("[+]", "\033[1;32m"),
    logging.WARNING: ("[!]", "\033[1;33m"),
    logging.ERROR: ("[-]", "\033[1;31m"),
    logging.CRITICAL: ("[-]", "\033[1;31m"),
}


class ConsoleFormatter(logging.Formatter):
    """Operator-facing format: one marker per level, optional ANSI color.

    Records logged through ``log_section`` / ``log_notice`` carry a ``style``
    attribute and are rendered as headers or plain notice text instead.
    """

    def __init__(self, *, color: bool = False) -> None:
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        style = getattr(record, "style", None)

        if style == "section":
            text, color = f"\n--- {msg} ---", _SECTION_COLOR
        elif style == "notice":
            text, color = msg, _NOTICE_COLOR
        else:
            marker, color = _LEVEL_STYLE.get(record.levelno, ("[?]", ""))
            text = f"{marker} {msg}"

        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"

        if self.color and color:
            return f"{color}{text}{_RESET}"
        return text


def _stream_is_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def log_section(log: logging.Logger, title: str) -> None:
    log.info(title, extra={"style": "section"})


def log_notice(log: logging.Logger, text: str) -> None:
    log.info(text, extra={"style": "notice"})


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
    console_stream: Optional[TextIO] = None,
) -> str:
    """Configure logging.

    Every command and decision goes to the log file; the console gets the
    short marker format for the operator.

    Notes:
    - Writing to /var/log may not be permitted (e.g. a dry run as a normal
      user). We still *attempt* it first and fall back to a file in the
      working directory, reporting both paths.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_autosetup_configured", False):
        return getattr(logger, "_autosetup_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        chosen_path = log_path
    except OSError:
        # Fall back to a writable location.
        fallback = str(Path.cwd() / "debian-autosetup.log")
        file_handler = logging.FileHandler(fallback)
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    file_handler.setLevel(logging.DEBUG)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler(console_stream)
        console.setLevel(level)
        console.setFormatter(ConsoleFormatter(color=_stream_is_tty(console.stream)))
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_autosetup_configured", True)
    setattr(logger, "_autosetup_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
