"""Pulls pieces together to serve Snooflake IDs over HTTP.

This module provides:
- create_app: a function to get a Flask considering a dev/prod environment
- build_generator: a function that builds a Generator from app config
"""

import time

from flask import Flask, g, request

from .api.endpoints import register_endpoints
from .config import config
from .ids import Generator
from .utils.logging import setup_logging
from .utils.network import fixed_machine_id


def build_generator(app_config):
    """Builds a Generator from ``EPOCH`` and ``MACHINE_ID`` config values.

    Falls back to the default epoch and to private IP discovery when unset.
    """
    machine_id = app_config.get("MACHINE_ID")
    return Generator(
        epoch=app_config.get("EPOCH"),
        machine_id=fixed_machine_id(machine_id) if machine_id is not None else None,
    )


def create_app(config_name="development", generator=None):
    """Initializes a Snooflake Flask app with its own Generator.

    Raises:
        GeneratorError: If no generator is given and one can't be built from config
    """
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    setup_logging(app)

    if generator is None:
        generator = build_generator(app.config)

    register_endpoints(app, generator)

    @app.before_request
    def _start_timer():
        g.start_time = time.time()

    @app.after_request
    def _log_request(response):
        if app.config["LOG_REQUESTS"]:
            duration = (time.time() - g.start_time) * 1000
            log_message = (
                f"{request.remote_addr} - {request.method} {request.path} "
                f"HTTP/{request.environ.get('SERVER_PROTOCOL')} "
                f"{response.status_code} - {duration:.2f}ms"
            )
            app.logger.info(log_message)
        return response

    return app
