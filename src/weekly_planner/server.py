from __future__ import annotations

"""REST API over the planner store (Flask).

Routes live on a Blueprint mounted under ``/api``. A DatabaseManager is
opened lazily per request and kept on ``flask.g``.
"""

import logging
from typing import Any

from flask import Blueprint, Flask, current_app, g, jsonify, request

from .config import PlannerConfig
from .database_manager import DBConfig, DatabaseManager
from .repositories import (
    create_activity,
    create_template,
    delete_activity,
    delete_template,
    list_activities,
    list_templates,
    toggle_activity,
)
from .schedule import ValidationError, validate_activity_fields, validate_template_fields

_log = logging.getLogger(__name__)

api_bp = Blueprint("planner_api", __name__, url_prefix="/api")


def get_db() -> DatabaseManager:
    if "db" not in g:
        g.db = DatabaseManager(DBConfig(path=current_app.config["DB_PATH"]))
    return g.db


def close_db(_exc: BaseException | None = None) -> None:
    db = g.pop("db", None)
    if db is not None:
        db.close()


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data


# --- Activities -------------------------------------------------------------

@api_bp.route("/activities", methods=["GET"])
def get_activities():
    return jsonify([a.to_dict() for a in list_activities(get_db())])


@api_bp.route("/activities", methods=["POST"])
def add_activity():
    activity = validate_activity_fields(_json_body())
    created = create_activity(get_db(), activity)
    _log.info("activity created", extra={"_json_id": created.id, "_json_day": created.day_of_week})
    return jsonify({"id": created.id}), 201


@api_bp.route("/activities/<int(signed=True):activity_id>/toggle", methods=["PATCH"])
def toggle(activity_id: int):
    toggle_activity(get_db(), activity_id)
    _log.info("activity toggled", extra={"_json_id": activity_id})
    return jsonify({"success": True})


@api_bp.route("/activities/<int(signed=True):activity_id>", methods=["DELETE"])
def remove_activity(activity_id: int):
    delete_activity(get_db(), activity_id)
    _log.info("activity deleted", extra={"_json_id": activity_id})
    return jsonify({"success": True})


# --- Templates --------------------------------------------------------------

@api_bp.route("/templates", methods=["GET"])
def get_templates():
    return jsonify([t.to_dict() for t in list_templates(get_db())])


@api_bp.route("/templates", methods=["POST"])
def add_template():
    template = validate_template_fields(_json_body())
    created = create_template(get_db(), template)
    _log.info("template created", extra={"_json_id": created.id})
    return jsonify({"id": created.id}), 201


@api_bp.route("/templates/<int(signed=True):template_id>", methods=["DELETE"])
def remove_template(template_id: int):
    delete_template(get_db(), template_id)
    _log.info("template deleted", extra={"_json_id": template_id})
    return jsonify({"success": True})


@api_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})


@api_bp.errorhandler(ValidationError)
def handle_validation_error(err: ValidationError):
    _log.warning("rejected request: %s", err)
    return jsonify({"error": str(err)}), 400


def create_app(config: PlannerConfig) -> Flask:
    app = Flask(__name__)
    app.config["DB_PATH"] = config.db_path
    app.json.sort_keys = False

    # Schema is migrated once at startup with a short-lived connection.
    db = DatabaseManager(DBConfig(path=config.db_path))
    try:
        db.init_db()
    finally:
        db.close()

    app.register_blueprint(api_bp)
    app.teardown_appcontext(close_db)
    _log.info("api ready", extra={"_json_db": str(config.db_path)})
    return app


__all__ = ["create_app", "api_bp", "get_db"]
