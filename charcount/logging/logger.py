import logging
import sys
from pathlib import Path

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Log:
    """Centralized logging for the analysis pipeline.

    Messages go to stderr so that the report printed on stdout stays
    machine-readable when ``--json`` is used.
    """

    _logger: logging.Logger = logging.getLogger("charcount")

    @classmethod
    def configure(cls, log_level: str, log_file: Path | None = None) -> None:
        """Configure the level, a stderr handler and an optional log file."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(_FORMAT))
            cls._logger.addHandler(handler)
        if log_file is not None and not any(
            isinstance(h, logging.FileHandler) for h in cls._logger.handlers
        ):
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(_FORMAT))
            cls._logger.addHandler(file_handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def progress(cls, percent: float, message: str) -> None:
        """Log a progress update as ``[ 42%] message`` at info level."""
        cls._logger.info(f"[{percent:3.0f}%] {message}")
