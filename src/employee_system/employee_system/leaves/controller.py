from __future__ import annotations

from flask import Flask, request

from ..auth.model import Principal
from ..common.http import json_body, ok
from ..common.validators import parse_optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = container.authenticator
    leave_service = container.leave_service

    @app.route("/api/leaves", methods=["POST"], endpoint="leave_create")
    @auth.require_auth
    def create_leave(*, principal: Principal):
        body = json_body()
        leave = leave_service.create_leave(
            user_id=principal.user_id,
            start_date=body.get("startDate"),
            end_date=body.get("endDate"),
            reason=body.get("reason"),
        )
        return ok({"leaveRequest": leave.to_dict()}, message="Leave request submitted successfully", status=201)

    @app.route("/api/leaves/my-requests", methods=["GET"], endpoint="leave_my_requests")
    @auth.require_auth
    def my_requests(*, principal: Principal):
        rows = [lr.to_dict() for lr in leave_service.my_requests(principal.user_id, status=request.args.get("status"))]
        return ok({"leaveRequests": rows, "count": len(rows)})

    @app.route("/api/leaves/all", methods=["GET"], endpoint="leave_all")
    @auth.require_elevated
    def all_requests(*, principal: Principal):
        rows = leave_service.all_requests(
            status=request.args.get("status"),
            user_id=parse_optional_int(request.args.get("userId"), "userId"),
        )
        data = [lr.to_dict() for lr in rows]
        return ok({"leaveRequests": data, "count": len(data)})

    @app.route("/api/leaves/<int:request_id>/status", methods=["PATCH"], endpoint="leave_update_status")
    @auth.require_elevated
    def update_status(request_id: int, *, principal: Principal):
        leave = leave_service.update_status(request_id=request_id, status=json_body().get("status"))
        return ok({"leaveRequest": leave.to_dict()}, message="Leave request status updated successfully")
