from __future__ import annotations

from flask import Flask, request

from ..auth.model import Principal
from ..common.http import ok
from ..common.validators import parse_date_field, parse_optional_int
from ..container import Container
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT, DEFAULT_HISTORY_LIMIT


def register(app: Flask, container: Container) -> None:
    auth = container.authenticator
    attendance_service = container.attendance_service

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @auth.require_auth
    def check_in(*, principal: Principal):
        record = attendance_service.check_in(principal.user_id)
        return ok({"attendance": record.to_dict()}, message="Checked in successfully", status=201)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @auth.require_auth
    def check_out(*, principal: Principal):
        record = attendance_service.check_out(principal.user_id)
        return ok({"attendance": record.to_dict()}, message="Checked out successfully")

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @auth.require_auth
    def today(*, principal: Principal):
        return ok(attendance_service.today_status(principal.user_id))

    @app.route("/api/attendance/my-records", methods=["GET"], endpoint="attendance_my_records")
    @auth.require_auth
    def my_records(*, principal: Principal):
        limit = parse_optional_int(request.args.get("limit"), "limit") or DEFAULT_HISTORY_LIMIT
        rows = [r.to_dict() for r in attendance_service.my_records(principal.user_id, limit=limit)]
        return ok({"attendance": rows, "count": len(rows)})

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_all")
    @auth.require_elevated
    def all_records(*, principal: Principal):
        raw_date = request.args.get("date")
        rows = attendance_service.all_records(
            user_id=parse_optional_int(request.args.get("userId"), "userId"),
            work_date=parse_date_field(raw_date, "date") if raw_date else None,
            limit=parse_optional_int(request.args.get("limit"), "limit") or DEFAULT_ADMIN_LIST_LIMIT,
        )
        data = [r.to_dict() for r in rows]
        return ok({"attendance": data, "count": len(data)})
