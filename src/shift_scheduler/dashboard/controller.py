from __future__ import annotations

from flask import Flask, render_template

from ..container import Container


def register(app: Flask, container: Container) -> None:
    gate = container.access_gate

    @app.route("/employee/dashboard", endpoint="employee_dashboard")
    @gate.employee_required
    def employee_dashboard(current_user):
        data = container.dashboard_service.for_employee(user_id=current_user.user_id)
        return render_template("employee/dashboard.html", current_user=current_user, data=data)

    @app.route("/employee/profile", endpoint="employee_profile")
    @gate.employee_required
    def employee_profile(current_user):
        return render_template("profile.html", current_user=current_user)

    @app.route("/admin/dashboard", endpoint="admin_dashboard")
    @gate.admin_required
    def admin_dashboard(current_user):
        data = container.dashboard_service.for_admin()
        return render_template("admin/dashboard.html", current_user=current_user, data=data)

    @app.route("/admin/profile", endpoint="admin_profile")
    @gate.admin_required
    def admin_profile(current_user):
        return render_template("profile.html", current_user=current_user)
