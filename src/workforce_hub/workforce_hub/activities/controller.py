from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file

from ..common.web import api_errors, login_required, optional_int_arg, payload, send_xlsx, to_json
from ..container import Container
from ..core.enums import CheckInMethod
from ..core.exceptions import ValidationError
from ..reports.excel import attendees_workbook
from .qr import decode_qr_image, make_qr_png

logger = logging.getLogger(__name__)


def _check_in_json(result) -> dict:
    return {
        "success": True,
        "attendance_id": result.attendance_id,
        "employee": {
            "employee_id": result.employee.employee_id,
            "employee_code": result.employee.employee_code,
            "full_name": result.employee.full_name,
        },
        "activity_id": result.activity.activity_id,
        "method": result.method.value,
        "message": f"{result.employee.full_name} checked in",
    }


def register(app: Flask, container: Container) -> None:
    svc = container.activity_service

    @app.route("/api/activities", methods=["GET"], endpoint="activities_list")
    @login_required
    def activities_list():
        items = svc.list_activities(search=request.args.get("q", ""))
        return jsonify({"success": True, "activities": to_json(items)})

    @app.route("/api/activities/upcoming", methods=["GET"], endpoint="activities_upcoming")
    @login_required
    @api_errors("loading upcoming activities")
    def activities_upcoming():
        items = svc.upcoming(days=optional_int_arg("days"))
        return jsonify({"success": True, "count": len(items), "activities": to_json(items)})

    @app.route("/api/activities/open", methods=["GET"], endpoint="activities_open")
    @login_required
    def activities_open():
        return jsonify({"success": True, "activities": to_json(svc.open_for_check_in())})

    @app.route("/api/activities/<int:activity_id>", methods=["GET"], endpoint="activities_get")
    @login_required
    @api_errors("loading activity")
    def activities_get(activity_id: int):
        return jsonify({"success": True, "activity": to_json(svc.get_activity(activity_id))})

    @app.route("/api/activities", methods=["POST"], endpoint="activities_create")
    @login_required
    @api_errors("creating activity")
    def activities_create():
        activity_id = svc.create_activity(payload())
        return jsonify({"success": True, "activity_id": activity_id}), 201

    @app.route("/api/activities/<int:activity_id>", methods=["PUT"], endpoint="activities_update")
    @login_required
    @api_errors("updating activity")
    def activities_update(activity_id: int):
        svc.update_activity(activity_id, payload())
        return jsonify({"success": True})

    @app.route("/api/activities/<int:activity_id>", methods=["DELETE"], endpoint="activities_delete")
    @login_required
    @api_errors("deleting activity")
    def activities_delete(activity_id: int):
        svc.delete_activity(activity_id)
        return jsonify({"success": True})

    @app.route("/api/activities/<int:activity_id>/attendees", methods=["GET"], endpoint="activities_attendees")
    @login_required
    @api_errors("loading attendees")
    def activities_attendees(activity_id: int):
        return jsonify({"success": True, "attendees": to_json(list(svc.attendees(activity_id)))})

    @app.route("/api/activities/<int:activity_id>/attendees.xlsx", methods=["GET"], endpoint="activities_attendees_xlsx")
    @login_required
    @api_errors("exporting attendees")
    def activities_attendees_xlsx(activity_id: int):
        activity = svc.get_activity(activity_id)
        content = attendees_workbook(activity, svc.attendees(activity_id))
        return send_xlsx(content, f"activity_{activity_id}_attendees.xlsx")

    @app.route("/api/activities/<int:activity_id>/checkin", methods=["POST"], endpoint="activities_checkin")
    @login_required
    @api_errors("checking in")
    def activities_checkin(activity_id: int):
        data = payload()
        code = data.get("employee_code") or data.get("code")
        method = CheckInMethod.QR if code else CheckInMethod.MANUAL
        if data.get("method"):
            try:
                method = CheckInMethod(data["method"])
            except ValueError:
                raise ValidationError("Check-in method must be QR or Manual")
        result = svc.check_in(activity_id, employee_code=code, employee_id=data.get("employee_id"), method=method)
        return jsonify(_check_in_json(result)), 201

    @app.route("/api/activities/<int:activity_id>/checkin/image", methods=["POST"], endpoint="activities_checkin_image")
    @login_required
    @api_errors("checking in")
    def activities_checkin_image(activity_id: int):
        """Accept an uploaded photo of an employee badge and check the employee in."""

        if "image" not in request.files:
            raise ValidationError("Image file is required")
        code = decode_qr_image(request.files["image"].stream)
        result = svc.check_in(activity_id, employee_code=code, method=CheckInMethod.QR)
        return jsonify(_check_in_json(result)), 201

    @app.route("/api/employees/<int:employee_id>/qr.png", methods=["GET"], endpoint="employee_qr_image")
    @login_required
    @api_errors("generating QR code")
    def employee_qr_image(employee_id: int):
        employee = container.masterdata_service.get_employee(employee_id)
        png = make_qr_png(employee.employee_code)
        return send_file(io.BytesIO(png), mimetype="image/png")
