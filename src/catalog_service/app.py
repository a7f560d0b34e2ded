import logging
from typing import Any, Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import Settings, load_settings
from .errors import NotFound, ValidationError
from .store import JsonFileStore
from .validation import validate_product_input


logger = logging.getLogger(__name__)


def _store() -> JsonFileStore:
    return current_app.extensions["catalog_store"]


def _request_body() -> Any:
    data = request.get_json(silent=True)
    if data is None:
        # unparseable bodies fail validation as non-objects
        raw = request.get_data(as_text=True)
        return raw if raw.strip() else {}
    return data


def list_products():
    return jsonify(_store().list_products()), 200


def get_product(product_id: str):
    return jsonify(_store().get_product(product_id)), 200


def create_product():
    result = validate_product_input(_request_body())
    if not result.ok:
        raise ValidationError(result.errors)
    prod = _store().create_product(result.sanitized.name, result.sanitized.price)
    current_app.logger.info("created product %s", prod["id"])
    return jsonify(prod), 201


def update_product(product_id: str):
    result = validate_product_input(_request_body(), partial=True)
    if not result.ok:
        raise ValidationError(result.errors)
    prod = _store().update_product(product_id, result.sanitized.changes())
    return jsonify(prod), 200


def delete_product(product_id: str):
    prod = _store().delete_product(product_id)
    current_app.logger.info("deleted product %s", product_id)
    return jsonify({"message": "Product deleted successfully.", "product": prod}), 200


def _handle_validation_error(exc: ValidationError):
    return jsonify({"errors": exc.errors}), exc.status_code


def _handle_not_found(exc: NotFound):
    return jsonify({"error": str(exc)}), exc.status_code


def _handle_http_error(exc: HTTPException):
    return jsonify({"error": exc.description}), exc.code


def _handle_unexpected(exc: Exception):
    current_app.logger.exception("unhandled error on %s %s", request.method, request.path)
    body = {"error": "Internal server error."}
    if current_app.config["CATALOG_SETTINGS"].development:
        body["details"] = str(exc)
    return jsonify(body), 500


def create_app(settings: Optional[Settings] = None, store: Optional[JsonFileStore] = None) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["CATALOG_SETTINGS"] = settings
    app.json.sort_keys = False
    app.extensions["catalog_store"] = store or JsonFileStore(settings.data_file)

    CORS(app, resources={r"/*": {"origins": "*"}})

    app.add_url_rule("/products", view_func=list_products, methods=["GET"])
    app.add_url_rule("/products", view_func=create_product, methods=["POST"])
    app.add_url_rule("/products/<product_id>", view_func=get_product, methods=["GET"])
    app.add_url_rule("/products/<product_id>", view_func=update_product, methods=["PUT"])
    app.add_url_rule("/products/<product_id>", view_func=delete_product, methods=["DELETE"])

    app.register_error_handler(ValidationError, _handle_validation_error)
    app.register_error_handler(NotFound, _handle_not_found)
    app.register_error_handler(HTTPException, _handle_http_error)
    app.register_error_handler(Exception, _handle_unexpected)

    logger.debug("catalog app using %s", app.extensions["catalog_store"].path)
    return app
