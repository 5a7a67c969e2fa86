from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import api_errors, login_required, optional_int_arg, payload, send_xlsx, to_json
from ..container import Container
from ..reports.excel import at_risk_workbook, health_records_workbook
from .model import HealthRecord
from .risk import blood_pressure_status, bmi, score_risk


def record_json(r: HealthRecord) -> dict:
    data = to_json(r)
    risk = score_risk(r)
    data["bmi"] = bmi(r.weight, r.height)
    data["bp_status"] = blood_pressure_status(r.systolic, r.diastolic).value
    data["risk_score"] = risk.score
    data["risk_labels"] = list(risk.labels)
    return data


def register(app: Flask, container: Container) -> None:
    svc = container.health_service

    @app.route("/api/health/records", methods=["GET"], endpoint="health_records_list")
    @login_required
    @api_errors("loading health records")
    def health_records_list():
        items = svc.list_records(search=request.args.get("q", ""), dept_id=optional_int_arg("dept_id"))
        return jsonify({"success": True, "records": [record_json(r) for r in items]})

    @app.route("/api/health/records/<int:record_id>", methods=["GET"], endpoint="health_records_get")
    @login_required
    @api_errors("loading health record")
    def health_records_get(record_id: int):
        return jsonify({"success": True, "record": record_json(svc.get_record(record_id))})

    @app.route("/api/health/records", methods=["POST"], endpoint="health_records_create")
    @login_required
    @api_errors("saving health record")
    def health_records_create():
        record_id = svc.record(payload())
        return jsonify({"success": True, "record_id": record_id}), 201

    @app.route("/api/health/records/<int:record_id>", methods=["PUT"], endpoint="health_records_update")
    @login_required
    @api_errors("updating health record")
    def health_records_update(record_id: int):
        svc.update_record(record_id, payload())
        return jsonify({"success": True})

    @app.route("/api/health/records/<int:record_id>", methods=["DELETE"], endpoint="health_records_delete")
    @login_required
    @api_errors("deleting health record")
    def health_records_delete(record_id: int):
        svc.delete_record(record_id)
        return jsonify({"success": True})

    @app.route("/api/health/records.xlsx", methods=["GET"], endpoint="health_records_xlsx")
    @login_required
    @api_errors("exporting health records")
    def health_records_xlsx():
        items = svc.list_records(search=request.args.get("q", ""), dept_id=optional_int_arg("dept_id"))
        return send_xlsx(health_records_workbook(items), "health_records.xlsx")

    @app.route("/api/health/dashboard", methods=["GET"], endpoint="health_dashboard")
    @login_required
    @api_errors("loading health dashboard")
    def health_dashboard():
        return jsonify({"success": True, "dashboard": to_json(svc.dashboard(days=optional_int_arg("days")))})

    @app.route("/api/health/at-risk.xlsx", methods=["GET"], endpoint="health_at_risk_xlsx")
    @login_required
    @api_errors("exporting at-risk list")
    def health_at_risk_xlsx():
        return send_xlsx(at_risk_workbook(svc.at_risk(days=optional_int_arg("days"))), "at_risk_employees.xlsx")
