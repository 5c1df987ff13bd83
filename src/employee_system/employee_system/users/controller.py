from __future__ import annotations

from flask import Flask, request

from ..auth.model import Principal
from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = container.authenticator
    user_service = container.user_service

    @app.route("/api/users/profile", methods=["GET"], endpoint="user_profile")
    @auth.require_auth
    def profile(*, principal: Principal):
        user = user_service.profile(principal.user_id)
        return ok({"user": user.public_dict()})

    @app.route("/api/users", methods=["GET"], endpoint="user_list")
    @auth.require_elevated
    def list_users(*, principal: Principal):
        users = [u.public_dict() for u in user_service.list_users(role=request.args.get("role"))]
        return ok({"users": users, "count": len(users)})

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="user_detail")
    @auth.require_self_or_elevated("user_id")
    def user_detail(user_id: int, *, principal: Principal):
        user = user_service.get_user(principal, user_id)
        return ok({"user": user.public_dict()})
