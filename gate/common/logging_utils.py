import logging
from flask import Flask, current_app
from flask.logging import default_handler

FALLBACK_LOGGER = "channel-gate"
LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return current_app logger if available, otherwise the package logger."""
    try:
        return current_app.logger
    except RuntimeError:
        return logging.getLogger(name or FALLBACK_LOGGER)


def configure_logging(app: Flask, level: str = "INFO") -> None:
    """Configure root logging; app.logger propagates to it with no handler of its own."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    app.logger.removeHandler(default_handler)
    app.logger.setLevel(level)
    app.logger.propagate = True
    logging.getLogger(FALLBACK_LOGGER).setLevel(level)
