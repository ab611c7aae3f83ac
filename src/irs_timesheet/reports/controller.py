from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, current_user_id, login_required, ok, roles_required
from ..core.enums import Role
from ..container import Container
from .service import CsvExport


def register(app: Flask, container: Container) -> None:
    def _send_csv(export: CsvExport):
        return app.response_class(
            export.content.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        summary = container.report_service.dashboard(
            current_role=current_role(),
            current_user_id=current_user_id(),
        )
        return ok(summary=summary)

    @app.route("/api/reports/timesheets.csv", methods=["GET"], endpoint="export_timesheets_csv")
    @login_required
    def export_timesheets_csv():
        export = container.report_service.export_employee_csv(
            current_role=current_role(),
            current_user_id=current_user_id(),
            employee_id=request.args.get("employee_id"),
            filename=request.args.get("filename"),
        )
        return _send_csv(export)

    @app.route("/api/reports/all.csv", methods=["GET"], endpoint="export_all_csv")
    @roles_required(Role.MANAGER, Role.ADMIN, Role.SUPER_ADMIN)
    def export_all_csv():
        export = container.report_service.export_all_csv(
            current_role=current_role(),
            filename=request.args.get("filename"),
        )
        return _send_csv(export)

    @app.route("/api/reports/weeks/<week_id>.csv", methods=["GET"], endpoint="export_week_csv")
    @login_required
    def export_week_csv(week_id: str):
        export = container.report_service.export_week_csv(
            current_role=current_role(),
            current_user_id=current_user_id(),
            week_id=week_id,
            filename=request.args.get("filename"),
        )
        return _send_csv(export)
