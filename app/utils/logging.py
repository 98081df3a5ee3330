# app/utils/logging.py
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Konfiguracja root loggera na stdout. Kolejne wywołania zmieniają tylko poziom."""
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger().setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
