from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import SessionUser


def dashboard_url(identity: SessionUser) -> str:
    if identity.role == Role.ADMIN:
        return url_for("admin_dashboard")
    return url_for("employee_dashboard")


def register(app: Flask, container: Container) -> None:
    gate = container.access_gate

    @app.route("/auth/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            try:
                identity = container.auth_service.verify(email, password)
            except AuthenticationError as e:
                flash(str(e), "danger")
                return redirect(url_for("login"))

            gate.sign_in(identity, remember=True)
            return redirect(dashboard_url(identity))

        identity = gate.current_user()
        if identity is not None:
            return redirect(dashboard_url(identity))
        return render_template("auth/login.html")

    @app.route("/auth/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if request.method == "POST":
            identity = container.user_service.signup(
                name=request.form.get("name", ""),
                email=request.form.get("email", ""),
                password=request.form.get("password", ""),
                phone=request.form.get("phone", ""),
            )
            gate.sign_in(identity, remember=True)
            flash("Welcome aboard!", "success")
            return redirect(dashboard_url(identity))

        return render_template("auth/signup.html")

    @app.route("/auth/logout", endpoint="logout")
    def logout():
        gate.sign_out()
        return redirect(url_for("home"))
