from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, api_errors, current_role, login_required, optional_int_arg, payload, to_json
from ..container import Container
from .model import Employee


def employee_json(e: Employee) -> dict:
    data = to_json(e)
    data["full_name"] = e.full_name
    return data


def register(app: Flask, container: Container) -> None:
    svc = container.masterdata_service

    @app.route("/api/branches", methods=["GET"], endpoint="branches_list")
    @login_required
    def branches_list():
        return jsonify({"success": True, "branches": to_json(list(svc.list_branches()))})

    @app.route("/api/branches", methods=["POST"], endpoint="branches_create")
    @admin_required
    @api_errors("creating branch")
    def branches_create():
        data = payload()
        branch_id = svc.create_branch(
            current_role=current_role(),
            name=data.get("name", ""),
            address=data.get("address", ""),
            phone=data.get("phone", ""),
        )
        return jsonify({"success": True, "branch_id": branch_id}), 201

    @app.route("/api/branches/<int:branch_id>", methods=["PUT"], endpoint="branches_update")
    @admin_required
    @api_errors("updating branch")
    def branches_update(branch_id: int):
        data = payload()
        svc.update_branch(
            current_role=current_role(),
            branch_id=branch_id,
            name=data.get("name", ""),
            address=data.get("address", ""),
            phone=data.get("phone", ""),
        )
        return jsonify({"success": True})

    @app.route("/api/branches/<int:branch_id>", methods=["DELETE"], endpoint="branches_delete")
    @admin_required
    @api_errors("deleting branch")
    def branches_delete(branch_id: int):
        svc.delete_branch(current_role=current_role(), branch_id=branch_id)
        return jsonify({"success": True})

    @app.route("/api/departments", methods=["GET"], endpoint="departments_list")
    @login_required
    @api_errors("loading departments")
    def departments_list():
        items = svc.list_departments(
            branch_id=optional_int_arg("branch_id"),
            active_only=request.args.get("active") == "1",
        )
        return jsonify({"success": True, "departments": to_json(items)})

    @app.route("/api/departments", methods=["POST"], endpoint="departments_create")
    @admin_required
    @api_errors("creating department")
    def departments_create():
        data = payload()
        dept_id = svc.create_department(
            current_role=current_role(), name=data.get("name", ""), branch_id=data.get("branch_id")
        )
        return jsonify({"success": True, "dept_id": dept_id}), 201

    @app.route("/api/departments/<int:dept_id>", methods=["PUT"], endpoint="departments_update")
    @admin_required
    @api_errors("updating department")
    def departments_update(dept_id: int):
        data = payload()
        svc.update_department(
            current_role=current_role(), dept_id=dept_id, name=data.get("name", ""), branch_id=data.get("branch_id")
        )
        return jsonify({"success": True})

    @app.route("/api/departments/<int:dept_id>", methods=["DELETE"], endpoint="departments_delete")
    @admin_required
    @api_errors("deleting department")
    def departments_delete(dept_id: int):
        svc.delete_department(current_role=current_role(), dept_id=dept_id)
        return jsonify({"success": True})

    @app.route("/api/positions", methods=["GET"], endpoint="positions_list")
    @login_required
    def positions_list():
        return jsonify({"success": True, "positions": to_json(list(svc.list_positions()))})

    @app.route("/api/positions", methods=["POST"], endpoint="positions_create")
    @admin_required
    @api_errors("creating position")
    def positions_create():
        data = payload()
        position_id = svc.create_position(
            current_role=current_role(), name=data.get("name", ""), level=data.get("level", 1)
        )
        return jsonify({"success": True, "position_id": position_id}), 201

    @app.route("/api/positions/<int:position_id>", methods=["PUT"], endpoint="positions_update")
    @admin_required
    @api_errors("updating position")
    def positions_update(position_id: int):
        data = payload()
        svc.update_position(
            current_role=current_role(), position_id=position_id, name=data.get("name", ""), level=data.get("level", 1)
        )
        return jsonify({"success": True})

    @app.route("/api/positions/<int:position_id>", methods=["DELETE"], endpoint="positions_delete")
    @admin_required
    @api_errors("deleting position")
    def positions_delete(position_id: int):
        svc.delete_position(current_role=current_role(), position_id=position_id)
        return jsonify({"success": True})

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    @api_errors("loading employees")
    def employees_list():
        items = svc.list_employees(
            search=request.args.get("q", ""),
            branch_id=optional_int_arg("branch_id"),
            dept_id=optional_int_arg("dept_id"),
            active_only=request.args.get("active") == "1",
        )
        return jsonify({"success": True, "employees": [employee_json(e) for e in items]})

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    @api_errors("loading employee")
    def employees_get(employee_id: int):
        return jsonify({"success": True, "employee": employee_json(svc.get_employee(employee_id))})

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @admin_required
    @api_errors("creating employee")
    def employees_create():
        employee_id = svc.create_employee(current_role=current_role(), payload=payload())
        return jsonify({"success": True, "employee_id": employee_id}), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @admin_required
    @api_errors("updating employee")
    def employees_update(employee_id: int):
        svc.update_employee(current_role=current_role(), employee_id=employee_id, payload=payload())
        return jsonify({"success": True})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @admin_required
    @api_errors("deleting employee")
    def employees_delete(employee_id: int):
        svc.delete_employee(current_role=current_role(), employee_id=employee_id)
        return jsonify({"success": True})

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    @api_errors("loading dashboard")
    def dashboard():
        counts = {
            "employees": len(svc.list_employees(active_only=True)),
            "departments": len(svc.list_departments(active_only=True)),
            "branches": len(svc.list_branches()),
            "activities": len(container.activity_service.list_activities()),
            "health_records": container.health_service.count_records(),
        }
        check_ins = container.activity_service.attendance_counts()
        counts["check_ins_today"] = check_ins["today"]
        counts["check_ins_total"] = check_ins["total"]
        return jsonify({"success": True, "counts": counts})
