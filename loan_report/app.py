"""REST backend for the mortgage affordability calculator."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

from flask import Flask, jsonify, request

from loan_report import config as cfg
from loan_report.data_model import FORM_SECTIONS, RATE_STAGE_MODELS, default_parameters
from loan_report.engine.aggregate import build_report
from loan_report.engine.state import CalculatorState, params_from_payload

logger = logging.getLogger(__name__)


def _is_nan(value: Any) -> bool:
    try:
        return not math.isfinite(value)
    except (TypeError, ValueError):
        return False


def _sanitize(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sanitize(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize(item) for item in value]
    if isinstance(value, float) and _is_nan(value):
        return None
    return value


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    clean_rows: List[Dict[str, Any]] = []
    for row in records:
        clean_rows.append({key: (None if _is_nan(value) else value) for key, value in row.items()})
    return clean_rows


def _report_payload(report) -> Dict[str, Any]:
    payload = _sanitize(report.to_dict())
    payload["simulation"] = _sanitize_records(payload["simulation"])
    return payload


def _schema_payload() -> Dict[str, Any]:
    return {
        "sections": {
            name: [col.to_payload() for col in columns]
            for name, columns in FORM_SECTIONS.items()
        },
        "rateStages": {
            str(loan): {
                "name": model.name,
                "columns": [col.to_payload() for col in model.columns],
                "blankRow": model.blank_row(),
            }
            for loan, model in RATE_STAGE_MODELS.items()
        },
        "defaults": default_parameters().to_dict(),
    }


def create_app(storage_path: str = cfg.STORAGE_PATH, storage_key: str = cfg.STORAGE_KEY) -> Flask:
    app = Flask(__name__)
    state = CalculatorState(storage_path, storage_key)
    app.config["CALCULATOR_STATE"] = state

    def _json_object():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return None
        return payload

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
        return jsonify(_schema_payload())

    @app.get("/api/params")
    def get_params():
        return jsonify(_sanitize(state.params.to_dict()))

    @app.post("/api/params")
    def update_params():
        payload = _json_object()
        if payload is None:
            return jsonify({"error": "Request body must be a JSON object."}), 400
        try:
            report = state.update(payload)
        except (TypeError, ValueError, AttributeError) as exc:
            logger.info("Rejected parameter update: %s", exc)
            return jsonify({"error": "Invalid parameter values."}), 400
        return jsonify(_report_payload(report))

    @app.delete("/api/params")
    def reset_params():
        return jsonify(_report_payload(state.reset()))

    @app.post("/api/report")
    def preview_report():
        payload = _json_object()
        if payload is None:
            return jsonify({"error": "Request body must be a JSON object."}), 400
        try:
            params = params_from_payload(payload)
        except (TypeError, ValueError, AttributeError) as exc:
            logger.info("Rejected report payload: %s", exc)
            return jsonify({"error": "Invalid parameter values."}), 400
        return jsonify(_report_payload(build_report(params)))

    @app.get("/api/schedule/<int:loan>")
    def get_schedule(loan: int):
        if loan not in (1, 2):
            return jsonify({"error": "Loan must be 1 or 2."}), 404
        schedule = state.report.schedule1 if loan == 1 else state.report.schedule2
        return jsonify(_sanitize(schedule.to_dict()))

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=False, port=8000)
