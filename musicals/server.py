"""
Flask application: the public site and JSON API, plus the password-protected admin panel.

Routes
  GET  /                                   public listings page
  GET  /api/musicals[?type=&from=&to=]     listings running today, or on for a date window
  GET  /api/musicals/<id>                  one listing
  GET  /api/stats                          running listings per type
  GET  /admin/                             admin page
  GET  /admin/api/musicals                 every listing
  POST /admin/api/musicals                 create
  PUT  /admin/api/musicals/<id>            update (full overwrite)
  DELETE /admin/api/musicals/<id>          delete
  POST /admin/api/musicals/import          upsert {"records": [...]} or {"csv": "..."}
  GET  /admin/api/musicals/export          CSV download
  GET  /admin/api/musicals/template        CSV template download
  POST /admin/api/delete-all               delete everything, needs {"password": ...}
  POST /admin/api/migrate-run-ids          backfill missing run ids

JSON errors are {"error": message} with status 404 or 500.
"""

import logging
import sqlite3
from datetime import date
from typing import Any, Optional

from flask import Blueprint, Flask, Response, current_app, g, jsonify, request
from werkzeug.exceptions import HTTPException

import musicals.config as cfg_module
import musicals.db as db_module
from musicals.auth import check_basic_auth, check_password, unauthorized_response
from musicals.availability import filter_active
from musicals.csv_io import export_csv, parse_csv, template_csv
from musicals.fields import musical_from_payload, parse_date
from musicals.importer import backfill_run_ids, reconcile
from musicals.models import SHOW_TYPES
from musicals.render import render_admin, render_index

logger = logging.getLogger(__name__)

pages = Blueprint("pages", __name__)
api = Blueprint("api", __name__, url_prefix="/api")
admin = Blueprint("admin", __name__, url_prefix="/admin")

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_app(cfg: Optional[dict] = None) -> Flask:
    app = Flask(__name__)
    app.config["MUSICALS"] = cfg if cfg is not None else cfg_module.load()
    app.register_blueprint(pages)
    app.register_blueprint(api)
    app.register_blueprint(admin)
    app.before_request(_require_login)
    app.teardown_appcontext(_close_db)
    app.register_error_handler(404, _not_found)
    return app


# --- Per-request helpers ---

def _cfg() -> dict:
    return current_app.config["MUSICALS"]


def get_db() -> sqlite3.Connection:
    if "db" not in g:
        g.db = db_module.connect(cfg_module.get_database_path(_cfg()))
    return g.db


def _close_db(exc: Optional[BaseException]) -> None:
    conn = g.pop("db", None)
    if conn is not None:
        conn.close()


def _require_login():
    if request.path != "/admin" and not request.path.startswith("/admin/"):
        return None
    username, password = cfg_module.get_admin_credentials(_cfg())
    if not check_basic_auth(request.authorization, username, password):
        logger.warning("Rejected admin request from %s to %s", request.remote_addr, request.path)
        return unauthorized_response()
    return None


def _error(message: str, status: int) -> tuple[Response, int]:
    return jsonify({"error": message}), status


def _not_found(exc: HTTPException):
    if request.path.startswith(("/api/", "/admin/api/")):
        return _error("Not found", 404)
    return exc


def _json_body() -> Any:
    data = request.get_json(silent=True)
    if data is None:
        raise ValueError("Request body must be JSON")
    return data


# --- Public pages ---

@pages.route("/")
def index():
    musicals = db_module.get_all_musicals(get_db())
    return render_index(musicals, cfg_module.get_site(_cfg()))


# --- Public API ---

@api.after_request
def _add_cors_headers(response: Response) -> Response:
    response.headers.update(_CORS_HEADERS)
    return response


@api.errorhandler(Exception)
def _api_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return exc
    logger.exception("Public API request failed: %s %s", request.method, request.path)
    return _error(str(exc), 500)


@api.route("/musicals")
def list_musicals():
    show_type = request.args.get("type")
    window_from = parse_date(request.args.get("from"))
    window_to = parse_date(request.args.get("to"))
    conn = get_db()

    if window_from is None and window_to is None:
        musicals = db_module.get_running_musicals(conn, show_type=show_type)
    else:
        start = window_from or date.today()
        end = window_to or start
        musicals = filter_active(db_module.get_overlapping_musicals(conn, start, end), start, end)
        if show_type in SHOW_TYPES:
            musicals = [m for m in musicals if m.type == show_type]

    return jsonify([m.to_dict() for m in musicals])


@api.route("/musicals/<int:musical_id>")
def get_musical(musical_id: int):
    musical = db_module.get_musical(get_db(), musical_id)
    if musical is None:
        return _error("Not found", 404)
    return jsonify(musical.to_dict())


@api.route("/stats")
def stats():
    return jsonify(db_module.running_stats(get_db()))


# --- Admin ---

@admin.errorhandler(Exception)
def _admin_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return exc
    logger.exception("Admin request failed: %s %s", request.method, request.path)
    return _error(str(exc), 500)


@admin.route("/")
def admin_page():
    musicals = db_module.get_all_musicals(get_db())
    return render_admin(musicals, cfg_module.get_site(_cfg()))


@admin.route("/api/musicals", methods=["GET"])
def admin_list_musicals():
    return jsonify([m.to_dict() for m in db_module.get_all_musicals(get_db())])


@admin.route("/api/musicals", methods=["POST"])
def admin_create_musical():
    musical = musical_from_payload(_json_body())
    created = db_module.insert_musical(get_db(), musical)
    logger.info("Created musical %s (%s)", created.id, created.run_id)
    return jsonify(created.to_dict()), 201


@admin.route("/api/musicals/<int:musical_id>", methods=["PUT"])
def admin_update_musical(musical_id: int):
    musical = musical_from_payload(_json_body())
    updated = db_module.update_musical(get_db(), musical_id, musical)
    if updated is None:
        return _error("Not found", 404)
    logger.info("Updated musical %s (%s)", musical_id, updated.run_id)
    return jsonify(updated.to_dict())


@admin.route("/api/musicals/<int:musical_id>", methods=["DELETE"])
def admin_delete_musical(musical_id: int):
    if db_module.delete_musical(get_db(), musical_id):
        logger.info("Deleted musical %s", musical_id)
    return jsonify({"success": True})


@admin.route("/api/musicals/import", methods=["POST"])
def admin_import():
    data = _json_body()
    if isinstance(data, dict) and isinstance(data.get("csv"), str):
        records = parse_csv(data["csv"])
    elif isinstance(data, dict) and isinstance(data.get("records"), list):
        records = data["records"]
    else:
        raise ValueError("Expected {\"records\": [...]} or {\"csv\": \"...\"}")
    result = reconcile(get_db(), records)
    return jsonify(result.to_dict())


@admin.route("/api/musicals/export", methods=["GET"])
def admin_export():
    filename = f"musicals_export_{date.today().isoformat()}.csv"
    return Response(
        export_csv(db_module.get_all_musicals(get_db())),
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@admin.route("/api/musicals/template", methods=["GET"])
def admin_template():
    return Response(
        template_csv(),
        mimetype="text/csv",
        headers={"Content-Disposition": 'attachment; filename="musicals_template.csv"'},
    )


@admin.route("/api/delete-all", methods=["POST"])
def admin_delete_all():
    data = _json_body()
    _, password = cfg_module.get_admin_credentials(_cfg())
    given = data.get("password") if isinstance(data, dict) else None
    if not check_password(given, password):
        return _error("Invalid password", 401)
    deleted = db_module.delete_all_musicals(get_db())
    logger.warning("Deleted all %d musicals", deleted)
    return jsonify({"deleted": deleted})


@admin.route("/api/migrate-run-ids", methods=["POST"])
def admin_migrate_run_ids():
    return jsonify({"migrated": backfill_run_ids(get_db())})
