from __future__ import annotations

from flask import Flask, redirect, render_template, request, url_for

from ..container import Container


def register(app: Flask, container: Container) -> None:
    gate = container.access_gate
    time_off = container.timeoff_service

    @app.route("/employee/timeoff", endpoint="employee_timeoff")
    @gate.employee_required
    def employee_timeoff(current_user):
        view = time_off.employee_view(user_id=current_user.user_id)
        return render_template("employee/timeoff.html", current_user=current_user, view=view)

    @app.route("/employee/timeoff/request", methods=["POST"], endpoint="employee_request_timeoff")
    @gate.employee_required
    def employee_request_timeoff(current_user):
        time_off.submit(
            current_role=current_user.role,
            user_id=current_user.user_id,
            start_date=request.form.get("startDate", ""),
            end_date=request.form.get("endDate", ""),
            reason=request.form.get("reason", ""),
            notes=request.form.get("notes", ""),
        )
        return redirect(url_for("employee_timeoff"))

    @app.route("/employee/timeoff/<int:request_id>/cancel", methods=["POST"], endpoint="employee_cancel_timeoff")
    @gate.employee_required
    def employee_cancel_timeoff(current_user, request_id: int):
        time_off.cancel(current_role=current_user.role, user_id=current_user.user_id, request_id=request_id)
        return redirect(url_for("employee_timeoff"))

    @app.route("/admin/timeoff", endpoint="admin_timeoff")
    @gate.admin_required
    def admin_timeoff(current_user):
        return render_template("admin/timeoff.html", current_user=current_user, view=time_off.admin_view())

    @app.route("/admin/timeoff/<int:request_id>/approve", methods=["POST"], endpoint="admin_approve_timeoff")
    @gate.admin_required
    def admin_approve_timeoff(current_user, request_id: int):
        time_off.approve(
            current_role=current_user.role,
            admin_user_id=current_user.user_id,
            request_id=request_id,
            admin_notes=request.form.get("adminNotes", ""),
        )
        return redirect(url_for("admin_timeoff"))

    @app.route("/admin/timeoff/<int:request_id>/deny", methods=["POST"], endpoint="admin_deny_timeoff")
    @gate.admin_required
    def admin_deny_timeoff(current_user, request_id: int):
        time_off.deny(
            current_role=current_user.role,
            admin_user_id=current_user.user_id,
            request_id=request_id,
            admin_notes=request.form.get("adminNotes", ""),
        )
        return redirect(url_for("admin_timeoff"))
