from __future__ import annotations

from flask import Flask, redirect, render_template, request, url_for

from ..container import Container
from ..core.enums import ShiftType


def register(app: Flask, container: Container) -> None:
    gate = container.access_gate
    shifts = container.shift_service

    # -------- Employee --------
    @app.route("/employee/shifts", endpoint="employee_shifts")
    @gate.employee_required
    def employee_shifts(current_user):
        overview = shifts.employee_overview(user_id=current_user.user_id)
        return render_template(
            "employee/shifts.html",
            current_user=current_user,
            overview=overview,
            shift_types=list(ShiftType),
        )

    @app.route("/employee/shifts/create-request", methods=["POST"], endpoint="employee_request_shift")
    @gate.employee_required
    def employee_request_shift(current_user):
        shifts.request_shift(
            current_role=current_user.role,
            user_id=current_user.user_id,
            shift_type=request.form.get("shiftType", ""),
            shift_date=request.form.get("date", ""),
            notes=request.form.get("notes", ""),
        )
        return redirect(url_for("employee_shifts"))

    @app.route("/employee/shifts/<int:shift_id>/delete", methods=["POST"], endpoint="employee_delete_shift")
    @gate.employee_required
    def employee_delete_shift(current_user, shift_id: int):
        shifts.withdraw_request(current_role=current_user.role, user_id=current_user.user_id, shift_id=shift_id)
        return redirect(url_for("employee_shifts"))

    @app.route("/employee/shifts/<int:shift_id>/take", methods=["POST"], endpoint="employee_take_shift")
    @gate.employee_required
    def employee_take_shift(current_user, shift_id: int):
        shifts.claim_open_shift(current_role=current_user.role, user_id=current_user.user_id, shift_id=shift_id)
        return redirect(url_for("employee_shifts"))

    # -------- Admin --------
    @app.route("/admin/shifts", endpoint="admin_shifts")
    @gate.admin_required
    def admin_shifts(current_user):
        return render_template(
            "admin/shifts.html",
            current_user=current_user,
            overview=shifts.admin_overview(),
            shift_types=list(ShiftType),
        )

    @app.route("/admin/shifts/create", methods=["POST"], endpoint="admin_create_shift")
    @gate.admin_required
    def admin_create_shift(current_user):
        shifts.post_open_shift(
            current_role=current_user.role,
            admin_user_id=current_user.user_id,
            shift_type=request.form.get("shiftType", ""),
            shift_date=request.form.get("date", ""),
            start_time=request.form.get("startTime", ""),
            end_time=request.form.get("endTime", ""),
            location=request.form.get("location", ""),
            notes=request.form.get("notes", ""),
        )
        return redirect(url_for("admin_shifts"))

    @app.route("/admin/shifts/<int:shift_id>/approve", methods=["POST"], endpoint="admin_approve_shift")
    @gate.admin_required
    def admin_approve_shift(current_user, shift_id: int):
        shifts.approve_request(current_role=current_user.role, admin_user_id=current_user.user_id, shift_id=shift_id)
        return redirect(url_for("admin_shifts"))

    @app.route("/admin/shifts/<int:shift_id>/deny", methods=["POST"], endpoint="admin_deny_shift")
    @gate.admin_required
    def admin_deny_shift(current_user, shift_id: int):
        shifts.deny_request(current_role=current_user.role, admin_user_id=current_user.user_id, shift_id=shift_id)
        return redirect(url_for("admin_shifts"))

    @app.route("/admin/shifts/<int:shift_id>/delete", methods=["POST"], endpoint="admin_delete_shift")
    @gate.admin_required
    def admin_delete_shift(current_user, shift_id: int):
        shifts.delete_shift(current_role=current_user.role, admin_user_id=current_user.user_id, shift_id=shift_id)
        return redirect(url_for("admin_shifts"))
