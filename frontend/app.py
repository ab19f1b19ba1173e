"""
Flask application for the Zips catalog.

Provides a JSON API over the zips collection with:
- Equality filters on city and state
- Multi-key sorting (sort=state:1,city,population:-1)
- Pagination (page, per_page)
- Create, update and delete of single zips

Stack: Flask + pymongo + pydantic
"""

import logging
import os
import uuid
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Blueprint, Flask, current_app, g, jsonify, request, url_for
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError

from frontend.schemas import ZipParams, extract_zip_payload
from src.common.config import Config
from src.common.logger import RequestLogger, get_logger, setup_logging
from src.common.repositories import ZipRepositoryInterface, get_zip_repository
from src.zips import PageRequest, ZipService, build_filter, build_sort, from_user_input
from src.zips.service import build_update

# Load environment variables
load_dotenv()

try:
    from version import __version__
    APP_VERSION = __version__
except ImportError:
    APP_VERSION = "dev"

setup_logging(Config.LOG_LEVEL, Config.LOG_FORMAT)
logger = logging.getLogger(__name__)

zips_bp = Blueprint("zips", __name__, url_prefix="/api/zips")
public_bp = Blueprint("public", __name__)

# Largest skip MongoDB accepts (int64)
MAX_SKIP = 2**63 - 1


def _get_service() -> ZipService:
    """ZipService bound to the app's repository."""
    return ZipService(current_app.extensions["zip_repository"])


def _log() -> RequestLogger:
    """Logger tagged with the current request id."""
    return get_logger(__name__, request_id=g.get("request_id"))


def _page_request(args) -> PageRequest:
    """
    Read page/per_page from the query string.

    Unparseable or non-positive values fall back to the defaults.
    per_page is capped at MAX_PER_PAGE, and a page whose offset would not
    fit in a BSON int64 falls back to 1.
    """
    default_per_page = current_app.config["DEFAULT_PER_PAGE"]
    requested = PageRequest.from_params(args, default_per_page=default_per_page)

    page = requested.page if requested.page >= 1 else 1
    per_page = requested.per_page if requested.per_page >= 1 else default_per_page
    per_page = min(per_page, current_app.config["MAX_PER_PAGE"])

    if (page - 1) * per_page > MAX_SKIP:
        page = 1
    return PageRequest(page=page, per_page=per_page)


def _parse_body() -> Optional[Dict[str, Any]]:
    """JSON body as zip fields, or None when nothing usable was sent."""
    payload = extract_zip_payload(request.get_json(silent=True))
    return payload or None


# ============================================================================
# API Endpoints
# ============================================================================

@zips_bp.route("", methods=["GET"])
def list_zips():
    """
    List zips with filters, sort and pagination.

    Query Parameters:
        city: Exact city match
        state: Exact state match
        sort: Comma-separated field[:direction] terms, e.g. population:-1,city
              Fields: city, state, population. Negative direction sorts descending.
        page: Page number (default: 1)
        per_page / perPage: Items per page (default: 30)

    Returns:
        JSON with zips array and pagination metadata
    """
    args = request.args
    page_request = _page_request(args)
    filter_spec = build_filter(args)
    sort_spec = build_sort(args.get("sort"))

    _log().debug(
        f"list zips: filter={filter_spec.to_query()}, sort={sort_spec.to_pymongo()}, "
        f"page={page_request.page}, per_page={page_request.per_page}"
    )

    result = _get_service().paginate(filter_spec, sort_spec, page_request)

    return jsonify({
        "zips": [record.to_dict() for record in result],
        "pagination": result.pagination(),
    })


@zips_bp.route("/<zip_id>", methods=["GET"])
def get_zip(zip_id: str):
    """
    Get a single zip by id.

    Returns:
        JSON with the zip record, 404 if not found
    """
    record = _get_service().find(zip_id)

    if record is None:
        return jsonify({"error": "Zip not found"}), 404

    return jsonify({"zip": record.to_dict()})


@zips_bp.route("", methods=["POST"])
def create_zip():
    """
    Create a zip.

    Request Body:
        {"zip": {"id", "city", "state", "population"}} or the bare object

    Returns:
        201 with the created zip and a Location header
    """
    payload = _parse_body()
    if payload is None:
        return jsonify({"error": "No data provided"}), 400

    params = ZipParams.model_validate(payload)
    record = from_user_input(params.submitted())

    if not record.persisted:
        return jsonify({"error": "id is required"}), 400

    _get_service().create(record)
    _log().info(f"Created zip {record.id}")

    response = jsonify({"zip": record.to_dict()})
    response.status_code = 201
    response.headers["Location"] = url_for("zips.get_zip", zip_id=record.id)
    return response


@zips_bp.route("/<zip_id>", methods=["PUT", "PATCH"])
def update_zip(zip_id: str):
    """
    Update a zip's editable fields (city, state, population).

    The id itself cannot be changed; a submitted id is ignored.

    Returns:
        JSON with the updated zip
    """
    service = _get_service()

    if service.find(zip_id) is None:
        return jsonify({"error": "Zip not found"}), 404

    payload = _parse_body()
    if payload is None:
        return jsonify({"error": "No data provided"}), 400

    updates = ZipParams.model_validate(payload).submitted()
    if not build_update(updates):
        return jsonify({"error": "No valid fields to update"}), 400

    service.update(zip_id, updates)
    _log().info(f"Updated zip {zip_id}")

    record = service.find(zip_id)
    if record is None:
        # Deleted between the update and the reload
        return jsonify({"error": "Zip not found"}), 404

    return jsonify({
        "success": True,
        "zip": record.to_dict(),
    })


@zips_bp.route("/<zip_id>", methods=["DELETE"])
def delete_zip(zip_id: str):
    """Delete a zip. Returns 204 on success, 404 if not found."""
    service = _get_service()

    if service.find(zip_id) is None:
        return jsonify({"error": "Zip not found"}), 404

    service.destroy(zip_id)
    _log().info(f"Deleted zip {zip_id}")
    return "", 204


@public_bp.route("/health", methods=["GET"])
def public_health_check():
    """
    Public health endpoint for external monitoring.

    Returns minimal info to avoid exposing sensitive data.
    """
    repository: ZipRepositoryInterface = current_app.extensions["zip_repository"]
    mongo_status = "connected" if repository.ping() else "disconnected"

    return jsonify({
        "status": "healthy" if mongo_status == "connected" else "degraded",
        "version": APP_VERSION,
        "services": {
            "mongodb": mongo_status,
        }
    })


# ============================================================================
# App factory
# ============================================================================

def _register_error_handlers(app: Flask) -> None:

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        return jsonify({"error": "Invalid zip data", "details": errors}), 400

    @app.errorhandler(DuplicateKeyError)
    def handle_duplicate_key(e: DuplicateKeyError):
        _log().warning(f"Duplicate zip rejected: {e}")
        return jsonify({"error": "Zip already exists"}), 409

    @app.errorhandler(PyMongoError)
    def handle_mongo_error(e: PyMongoError):
        _log().exception(f"MongoDB operation failed: {e}")
        # Details (hosts, topology) stay in the log
        return jsonify({"error": "Database unavailable"}), 503


def create_app(
    repository: Optional[ZipRepositoryInterface] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Flask:
    """
    Build the Flask application.

    Args:
        repository: Zip store to serve (default: built from environment)
        config: Extra Flask config values (e.g. {"TESTING": True})

    Returns:
        Configured Flask app
    """
    Config.validate()
    app = Flask(__name__)

    app.config["DEFAULT_PER_PAGE"] = Config.DEFAULT_PER_PAGE
    app.config["MAX_PER_PAGE"] = Config.MAX_PER_PAGE
    app.json.sort_keys = False
    app.secret_key = Config.FLASK_SECRET_KEY or os.urandom(24).hex()
    if config:
        app.config.update(config)

    if repository is None:
        repository = get_zip_repository()
    app.extensions["zip_repository"] = repository

    @app.before_request
    def assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex

    @app.after_request
    def echo_request_id(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers["X-Request-ID"] = request_id
        return response

    app.register_blueprint(zips_bp)
    app.register_blueprint(public_bp)
    _register_error_handlers(app)

    logger.info(f"Zips app {APP_VERSION} ready: {Config.summary()}")
    return app


app = create_app()


if __name__ == "__main__":
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=Config.DEBUG_MODE)
