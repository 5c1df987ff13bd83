from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_service = container.auth_service
    settings = container.auth_settings

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def register_user():
        body = json_body()
        user = auth_service.register(
            name=body.get("name"),
            email=body.get("email"),
            password=body.get("password"),
            role=body.get("role"),
        )
        return ok({"user": user.public_dict()}, message="User registered successfully", status=201)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        body = json_body()
        result = auth_service.login(email=body.get("email"), password=body.get("password"))
        user = result.user.public_dict()
        user.pop("createdAt", None)
        return ok({"token": result.token, "user": user}, message="Login successful")

    @app.route("/api/auth/request-otp", methods=["POST"], endpoint="auth_request_otp")
    def request_otp():
        body = json_body()
        issued = auth_service.request_otp(email=body.get("email"))
        data = {"otp": issued.code} if settings.expose_otp else {}
        return ok(data, message="OTP sent successfully. Check your email/console.")

    @app.route("/api/auth/verify-otp", methods=["POST"], endpoint="auth_verify_otp")
    def verify_otp():
        body = json_body()
        auth_service.verify_otp_and_change_password(
            email=body.get("email"),
            code=body.get("otp"),
            new_password=body.get("newPassword"),
        )
        return ok(message="Password changed successfully")
