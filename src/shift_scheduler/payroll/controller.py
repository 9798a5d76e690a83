from __future__ import annotations

from flask import Flask, redirect, render_template, request, url_for

from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    gate = container.access_gate
    payroll = container.payroll_service

    @app.route("/employee/payroll", endpoint="employee_payroll")
    @gate.employee_required
    def employee_payroll(current_user):
        view = payroll.employee_view(user_id=current_user.user_id)
        return render_template("employee/payroll.html", current_user=current_user, view=view)

    @app.route("/admin/payroll", endpoint="admin_payroll")
    @gate.admin_required
    def admin_payroll(current_user):
        return render_template(
            "admin/payroll.html",
            current_user=current_user,
            view=payroll.admin_view(),
            employees=container.users_repo.list_by_role(Role.EMPLOYEE),
        )

    @app.route("/admin/payroll/create", methods=["POST"], endpoint="admin_create_payroll")
    @gate.admin_required
    def admin_create_payroll(current_user):
        payroll.create_record(
            current_role=current_user.role,
            admin_user_id=current_user.user_id,
            employee_id=request.form.get("employeeId", ""),
            period_start=request.form.get("periodStart", ""),
            period_end=request.form.get("periodEnd", ""),
            hours_worked=request.form.get("hoursWorked", ""),
            hourly_rate=request.form.get("hourlyRate", ""),
            deductions=request.form.get("deductions", ""),
            notes=request.form.get("notes", ""),
        )
        return redirect(url_for("admin_payroll"))

    @app.route("/admin/payroll/<int:payroll_id>/update", methods=["POST"], endpoint="admin_update_payroll")
    @gate.admin_required
    def admin_update_payroll(current_user, payroll_id: int):
        payroll.update_hours(
            current_role=current_user.role,
            admin_user_id=current_user.user_id,
            payroll_id=payroll_id,
            hours_worked=request.form.get("hoursWorked", ""),
            hourly_rate=request.form.get("hourlyRate", ""),
            deductions=request.form.get("deductions", ""),
        )
        return redirect(url_for("admin_payroll"))

    @app.route("/admin/payroll/<int:payroll_id>/approve", methods=["POST"], endpoint="admin_approve_payroll")
    @gate.admin_required
    def admin_approve_payroll(current_user, payroll_id: int):
        payroll.approve(current_role=current_user.role, admin_user_id=current_user.user_id, payroll_id=payroll_id)
        return redirect(url_for("admin_payroll"))
