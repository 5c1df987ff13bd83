from __future__ import annotations

from flask import Flask, request

from ..auth.model import Principal
from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = container.authenticator
    task_service = container.task_service

    @app.route("/api/tasks", methods=["POST"], endpoint="task_create")
    @auth.require_auth
    def create_task(*, principal: Principal):
        body = json_body()
        task = task_service.create_task(
            principal,
            title=body.get("title"),
            description=body.get("description"),
            due_date=body.get("dueDate"),
            assigned_to=body.get("assignedTo"),
        )
        return ok({"task": task.to_dict()}, message="Task created successfully", status=201)

    @app.route("/api/tasks", methods=["GET"], endpoint="task_list")
    @auth.require_auth
    def list_tasks(*, principal: Principal):
        tasks = task_service.list_tasks(
            principal,
            status=request.args.get("status"),
            assigned_to=request.args.get("assignedTo"),
        )
        data = [t.to_dict() for t in tasks]
        return ok({"tasks": data, "count": len(data)})

    @app.route("/api/tasks/<int:task_id>", methods=["GET"], endpoint="task_detail")
    @auth.require_auth
    def get_task(task_id: int, *, principal: Principal):
        return ok({"task": task_service.get_task(principal, task_id).to_dict()})

    @app.route("/api/tasks/<int:task_id>", methods=["PATCH"], endpoint="task_update_status")
    @auth.require_auth
    def update_status(task_id: int, *, principal: Principal):
        task = task_service.update_status(principal, task_id, json_body().get("status"))
        return ok({"task": task.to_dict()}, message="Task status updated successfully")

    @app.route("/api/tasks/<int:task_id>", methods=["DELETE"], endpoint="task_delete")
    @auth.require_elevated
    def delete_task(task_id: int, *, principal: Principal):
        task_service.delete_task(task_id)
        return ok(message="Task deleted successfully")
