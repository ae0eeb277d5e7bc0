import logging
import os
import shutil
from typing import Optional

import click

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "INFO": "blue",
    "SUCCESS": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red",
}


def log_success(logger: logging.Logger, msg: str, *args) -> None:
    logger.log(SUCCESS, msg, *args)


class ClickEchoHandler(logging.Handler):
    """Writes records to the terminal as `[LEVEL] message` with a colored tag."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tag = click.style(f"[{record.levelname}]", fg=LEVEL_COLORS.get(record.levelname))
            click.echo(f"{tag} {record.getMessage()}", err=record.levelno >= logging.ERROR)
        except Exception:
            self.handleError(record)


def configure_logging(log_file: str, owner: Optional[str] = None, level: int = logging.INFO) -> None:
    """Attach the run log file and the console handler to the `fedorox` logger."""
    logger = logging.getLogger("fedorox")
    logger.setLevel(level)

    if getattr(logger, "_fedorox_configured", False):
        return

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)
    logger.addHandler(ClickEchoHandler())

    if owner and os.geteuid() == 0:
        try:
            shutil.chown(log_file, user=owner, group=owner)
        except (LookupError, OSError) as e:
            logger.warning(f"Could not hand log file {log_file} to {owner}: {e}")

    setattr(logger, "_fedorox_configured", True)
