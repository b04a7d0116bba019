"""The main endpoints file.

This module provides:
- API: a class of all endpoints
- register_endpoints: a function that registers endpoints onto an app and assigns a generator
"""
import logging
from http import HTTPStatus

from flask import Blueprint, Response, abort, jsonify, request

from ..codec import MAX_ID, decode
from ..ids import Generator
from ..utils.errors import GeneratorError, OverTimeLimitError


class API:
    """The API class to store endpoint methods + the generator."""
    def __init__(self, generator: Generator, max_batch: int = 1000):
        """Populates variables that are used by endpoints.

        Args:
            generator (Generator): The generator IDs are drawn from
            max_batch (int): The most IDs a single batch request may ask for
        """
        self.generator = generator
        self.max_batch = max_batch
        self.logger = logging.getLogger(__name__)

    def next_id(self):
        """Generates one ID and returns its decomposition as JSON."""
        try:
            snowflake = self.generator.next_id()
        except GeneratorError as e:
            self.logger.error("Failed to generate an ID: %s", e)
            return Response(str(e), HTTPStatus.INTERNAL_SERVER_ERROR, mimetype="text/plain")
        return jsonify(decode(snowflake).as_dict())

    def next_ids(self):
        """Generates ``count`` IDs (request arg) and returns their decompositions as a JSON list.

        On a mid-batch failure answers 500 with the error and whatever was produced before it.
        """
        count = request.args.get("count", type=int)
        if count is None:
            abort(HTTPStatus.BAD_REQUEST, description="Count is missing or not an integer")
        if not 0 <= count <= self.max_batch:
            abort(
                HTTPStatus.BAD_REQUEST,
                description=f"Count must be between 0 and {self.max_batch}",
            )
        try:
            ids = self.generator.next_ids(count)
        except OverTimeLimitError as e:
            self.logger.error("Batch stopped after %d of %d IDs: %s", len(e.ids), count, e)
            body = {"error": str(e), "ids": [decode(i).as_dict() for i in e.ids]}
            return jsonify(body), HTTPStatus.INTERNAL_SERVER_ERROR
        return jsonify([decode(i).as_dict() for i in ids])

    @staticmethod
    def decompose():
        """Splits the ``id`` request arg into its parts."""
        snowflake = request.args.get("id", type=int)
        if snowflake is None:
            abort(HTTPStatus.BAD_REQUEST, description="ID is missing or not an integer")
        if not 0 <= snowflake <= MAX_ID:
            abort(HTTPStatus.BAD_REQUEST, description="ID is not an unsigned 64-bit integer")
        return jsonify(decode(snowflake).as_dict())


def register_endpoints(app, generator):
    """Binds endpoints to a Flask app.

    Args:
        app (Flask): The app to bind endpoints to
        generator (Generator): The generator that will be used for IDs
    """
    api = API(generator, app.config["MAX_BATCH"])
    api_bp = Blueprint("api", __name__)
    api_bp.add_url_rule("/", view_func=api.next_id, methods=["GET"])
    api_bp.add_url_rule("/batch", view_func=api.next_ids, methods=["GET"])
    api_bp.add_url_rule("/decompose", view_func=api.decompose, methods=["GET"])
    app.register_blueprint(api_bp)
