"""Gives out a production-ready logger.

This module provides:
- setup_logging: a function to assign app logging to a rotating file handler
"""

import logging
import os
from logging.handlers import RotatingFileHandler


def setup_logging(app):
    """Sets logging of a Flask app to a .log file and std stream.

    The file handler is skipped when ``LOG_PATH`` is empty.

    Args:
        app (Flask): The Flask app to configure
    """

    log_level = logging.DEBUG if app.config["DEBUG"] else logging.INFO
    handlers = []

    log_path = app.config.get("LOG_PATH")
    if log_path:
        log_dir = os.path.dirname(log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = RotatingFileHandler(log_path, maxBytes=10_000_000, backupCount=5)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]")
        )
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
    console_handler.setLevel(log_level)
    handlers.append(console_handler)

    # app.logger is named after the package, so module loggers propagate into it.
    app.logger.handlers = handlers
    app.logger.setLevel(log_level)
