from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.web import current_role, current_user_id, login_required, ok, roles_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reviewers_only = roles_required(Role.MANAGER, Role.ADMIN, Role.SUPER_ADMIN)

    def _parse_date(value: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("Date must be YYYY-MM-DD")

    @app.route("/api/timesheets", methods=["GET"], endpoint="list_timesheets")
    @login_required
    def list_timesheets():
        role = current_role()
        status = request.args.get("status")
        employee_id = request.args.get("employee_id")
        svc = container.timesheet_service

        if role and role.is_reviewer:
            if status:
                weeks = svc.list_weeks_by_status(status)
                if employee_id:
                    weeks = [w for w in weeks if w.employee_id == employee_id]
            elif employee_id:
                weeks = svc.list_weeks_for_employee(employee_id)
            else:
                weeks = svc.list_all_weeks()
        else:
            weeks = svc.list_weeks_for_employee(current_user_id())
            if status:
                weeks = [w for w in weeks if w.status.value == status]
        return ok(timesheets=[w.to_dict() for w in weeks])

    @app.route("/api/timesheets/pending", methods=["GET"], endpoint="pending_timesheets")
    @reviewers_only
    def pending_timesheets():
        weeks = container.timesheet_service.pending_for_review()
        return ok(timesheets=[w.to_dict() for w in weeks])

    @app.route("/api/timesheets/week", methods=["GET"], endpoint="week_for_date")
    @login_required
    def week_for_date():
        day_s = request.args.get("date")
        day = _parse_date(day_s) if day_s else now_local().date()
        employee_id = current_user_id()
        role = current_role()
        if request.args.get("employee_id") and role and role.is_reviewer:
            employee_id = request.args["employee_id"]
        return ok(week=container.timesheet_service.week_for_date(employee_id=employee_id, day=day))

    @app.route("/api/timesheets/<week_id>", methods=["GET"], endpoint="get_timesheet")
    @login_required
    def get_timesheet(week_id: str):
        week = container.timesheet_service.get_week(
            current_role=current_role(),
            current_user_id=current_user_id(),
            week_id=week_id,
        )
        return ok(timesheet=week.to_dict())

    @app.route("/api/timesheets/<week_id>/days", methods=["PUT"], endpoint="save_day")
    @login_required
    def save_day(week_id: str):
        data = request.get_json(silent=True) or {}
        week = container.timesheet_service.save_day_draft(
            current_role=current_role(),
            current_user_id=current_user_id(),
            week_id=week_id,
            day=data.get("day") or {},
            week_label_text=data.get("week_label"),
            week_start=data.get("week_start"),
            employee_id=data.get("employee_id"),
        )
        return ok(timesheet=week.to_dict())

    @app.route("/api/timesheets/<week_id>/submit", methods=["POST"], endpoint="submit_timesheet")
    @login_required
    def submit_timesheet(week_id: str):
        week = container.timesheet_service.submit(current_user_id=current_user_id(), week_id=week_id)
        return ok(timesheet=week.to_dict())

    @app.route("/api/timesheets/<week_id>/review", methods=["POST"], endpoint="review_timesheet")
    @reviewers_only
    def review_timesheet(week_id: str):
        data = request.get_json(silent=True) or {}
        week = container.timesheet_service.review(
            current_role=current_role(),
            week_id=week_id,
            decision=data.get("decision", ""),
            comment=data.get("comment"),
        )
        return ok(timesheet=week.to_dict())

    @app.route("/api/timesheets/<week_id>/force-approve", methods=["POST"], endpoint="force_approve_timesheet")
    @reviewers_only
    def force_approve_timesheet(week_id: str):
        week = container.timesheet_service.force_approve(current_role=current_role(), week_id=week_id)
        return ok(timesheet=week.to_dict())
