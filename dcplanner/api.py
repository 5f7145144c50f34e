"""REST backend for the DB/DC switch planner."""

from __future__ import annotations

import datetime
import logging
import math
from typing import Any, Dict, List

from flask import Flask, jsonify, request

from dcplanner.config import load_config
from dcplanner.data_model import (
    ScenarioTableModel,
    default_payload,
    merge_with_defaults,
    profile_fields,
    user_input_from_payload,
)
from dcplanner.engine import calculate_projections
from dcplanner.engine.aggregate import aggregate_period, projections_frame
from dcplanner.engine.policy import BASE_MONTHLY_LIVING_COST, DRAWDOWN_RETURN_RATE
from dcplanner.engine.share import decode_share, encode_share
from dcplanner.engine.state import SettingsState
from dcplanner.errors import InvalidInputError
from dcplanner.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _current_year() -> int:
    return datetime.date.today().year


def _is_nan(value: Any) -> bool:
    try:
        return not math.isfinite(value)
    except (TypeError, ValueError):
        return False


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    clean_rows: List[Dict[str, Any]] = []
    for row in records:
        clean_rows.append({key: (None if _is_nan(value) else value) for key, value in row.items()})
    return clean_rows


def _invalid_input_response(exc: InvalidInputError):
    logger.warning("Rejected input: %s", exc)
    return jsonify({"error": exc.message, "field": exc.field}), 400


def _schema_payload(current_year: int) -> Dict[str, Any]:
    table = ScenarioTableModel(current_year)
    return {
        "currentYear": current_year,
        "profile": [f.to_payload() for f in profile_fields(current_year)],
        "scenarios": {
            "name": table.name,
            "columns": [col.to_payload() for col in table.columns],
            "defaults": _sanitize_records(table.create_default_df().to_dict("records")),
        },
        "policy": {
            "baseMonthlyLivingCost": {str(k): v for k, v in BASE_MONTHLY_LIVING_COST.items()},
            "drawdownReturnRate": DRAWDOWN_RETURN_RATE,
        },
    }


def create_app(config=None) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level)

    app = Flask(__name__)
    settings_state = SettingsState(config.settings_path)

    @app.after_request
    def apply_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET,POST,DELETE,OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    @app.get("/api/health")
    def healthcheck():
        return jsonify({"status": "ok"})

    @app.get("/api/schema")
    def get_schema():
        return jsonify(_schema_payload(_current_year()))

    @app.get("/api/defaults")
    def get_defaults():
        return jsonify(default_payload(_current_year()))

    @app.post("/api/calculate")
    def calculate():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "Request body must be a JSON object.", "field": "payload"}), 400
        try:
            step = int(request.args.get("step", 1))
        except (TypeError, ValueError):
            return jsonify({"error": "step must be an integer.", "field": "step"}), 400
        try:
            user_input = user_input_from_payload(payload)
            result = calculate_projections(user_input, _current_year())
        except InvalidInputError as exc:
            return _invalid_input_response(exc)

        body = result.to_dict()
        if step > 1:
            sampled = aggregate_period(projections_frame(result), step=step)
            body["projections"] = _sanitize_records(sampled.drop(columns=["Period"]).to_dict("records"))
        return jsonify(body)

    @app.get("/api/settings")
    def list_settings():
        return jsonify({"settings": settings_state.list_names()})

    @app.get("/api/settings/<name>")
    def get_settings(name: str):
        saved = settings_state.get(name)
        if not saved:
            return jsonify({"error": "Settings not found."}), 404
        return jsonify(merge_with_defaults(saved, _current_year()))

    @app.post("/api/settings/<name>")
    def save_settings(name: str):
        payload = request.get_json(silent=True)
        name = name.strip()
        if not name:
            return jsonify({"error": "Settings name is required."}), 400
        if not isinstance(payload, dict):
            return jsonify({"error": "Request body must be a JSON object.", "field": "payload"}), 400
        settings_state.save(name, payload)
        return jsonify({"message": "Settings saved.", "settings": settings_state.list_names()})

    @app.delete("/api/settings/<name>")
    def delete_settings(name: str):
        settings_state.delete(name)
        return jsonify({"message": "Settings deleted.", "settings": settings_state.list_names()})

    @app.post("/api/share")
    def create_share():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "Request body must be a JSON object.", "field": "payload"}), 400
        return jsonify({"token": encode_share(payload)})

    @app.get("/api/share/<path:token>")
    def open_share(token: str):
        return jsonify(decode_share(token, _current_year()))

    return app


if __name__ == "__main__":
    cfg = load_config()
    create_app(cfg).run(debug=cfg.debug, port=cfg.port)
