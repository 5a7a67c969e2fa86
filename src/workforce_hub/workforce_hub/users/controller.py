from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import admin_required, api_errors, current_role, login_required, payload, to_json
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS


def _truthy(value) -> bool:
    return str(value).strip().lower() in ("1", "true", "on", "yes")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    @api_errors("logging in")
    def login():
        data = payload()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = _truthy(data.get("remember_me", ""))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["username"] = s_user.username
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["employee_id"] = s_user.employee_id
        return jsonify({"success": True, "user": to_json(s_user)})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "success": True,
                "user": {
                    "user_id": session["user_id"],
                    "username": session.get("username"),
                    "full_name": session.get("name"),
                    "role": session.get("role"),
                    "employee_id": session.get("employee_id"),
                    "is_admin": session.get("role") == "admin",
                },
            }
        )

    @app.route("/api/me/password", methods=["POST"], endpoint="me_password")
    @login_required
    @api_errors("changing password")
    def me_password():
        data = payload()
        container.user_service.change_password(
            user_id=int(session["user_id"]),
            old_password=data.get("old_password", ""),
            new_password=data.get("new_password", ""),
        )
        return jsonify({"success": True})

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    @api_errors("loading users")
    def users_list():
        users = container.user_service.list_users(current_role=current_role())
        return jsonify({"success": True, "users": to_json(list(users))})

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    @api_errors("creating user")
    def users_create():
        data = payload()
        user_id = container.user_service.create_account(
            current_role=current_role(),
            username=data.get("username", ""),
            full_name=data.get("full_name", ""),
            password=data.get("password", ""),
            email=data.get("email"),
            role=data.get("role") or "staff",
            employee_id=data.get("employee_id"),
        )
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="users_update")
    @admin_required
    @api_errors("updating user")
    def users_update(user_id: int):
        data = payload()
        container.user_service.update_user(
            current_role=current_role(),
            user_id=user_id,
            full_name=data.get("full_name", ""),
            email=data.get("email"),
            role=data.get("role") or "staff",
            employee_id=data.get("employee_id"),
            is_active=_truthy(data.get("is_active", True)),
        )
        return jsonify({"success": True})

    @app.route("/api/users/<int:user_id>/password", methods=["POST"], endpoint="users_reset_password")
    @admin_required
    @api_errors("resetting password")
    def users_reset_password(user_id: int):
        container.user_service.reset_password(
            current_role=current_role(), user_id=user_id, password=payload().get("password", "")
        )
        return jsonify({"success": True})

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    @api_errors("deleting user")
    def users_delete(user_id: int):
        container.user_service.delete_user(current_role=current_role(), user_id=user_id)
        return jsonify({"success": True})
