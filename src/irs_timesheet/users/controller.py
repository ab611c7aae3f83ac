from __future__ import annotations

from flask import Flask, request, session

from ..common.web import current_role, current_user_id, fail, login_required, ok, roles_required
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_only = roles_required(Role.ADMIN, Role.SUPER_ADMIN)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        except AuthenticationError as e:
            session.clear()
            return fail(str(e), 401)

        session.clear()
        session["user_id"] = s_user.account_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        return ok(user=s_user.to_dict())

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        container.auth_service.logout(current_user_id())
        session.clear()
        return ok(message="Logged out")

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(user={"id": session["user_id"], "name": session.get("name"), "role": session.get("role")})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_only
    def list_users():
        accounts = container.user_service.list_accounts(current_role=current_role())
        return ok(users=[a.to_dict() for a in accounts])

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_only
    def create_user():
        data = request.get_json(silent=True) or {}
        password = data.get("password") or container.user_service.generate_password()
        result = container.user_service.create_account(
            current_role=current_role(),
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=password,
            role=data.get("role", ""),
        )
        return ok(201, **result.to_dict())

    @app.route("/api/users/generate-password", methods=["GET"], endpoint="generate_password")
    @admin_only
    def generate_password():
        return ok(password=container.user_service.generate_password())

    @app.route("/api/users/<account_id>", methods=["GET"], endpoint="get_user")
    @admin_only
    def get_user(account_id: str):
        account = container.user_service.get_account(current_role=current_role(), account_id=account_id)
        return ok(user=account.to_dict())

    @app.route("/api/users/<account_id>", methods=["PATCH"], endpoint="update_user")
    @admin_only
    def update_user(account_id: str):
        data = request.get_json(silent=True) or {}
        account = container.user_service.update_account(
            current_role=current_role(),
            current_user_id=current_user_id(),
            account_id=account_id,
            name=data.get("name"),
            email=data.get("email"),
            status=data.get("status"),
            role=data.get("role"),
        )
        return ok(user=account.to_dict())

    @app.route("/api/users/<account_id>/block", methods=["POST"], endpoint="block_user")
    @admin_only
    def block_user(account_id: str):
        data = request.get_json(silent=True) or {}
        account = container.user_service.set_blocked(
            current_role=current_role(),
            current_user_id=current_user_id(),
            account_id=account_id,
            blocked=bool(data.get("blocked", True)),
        )
        return ok(user=account.to_dict())

    @app.route("/api/users/<account_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_only
    def delete_user(account_id: str):
        container.user_service.delete_account(
            current_role=current_role(),
            current_user_id=current_user_id(),
            account_id=account_id,
        )
        return ok(message="User deleted")
