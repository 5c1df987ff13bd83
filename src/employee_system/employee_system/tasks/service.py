from __future__ import annotations

from typing import Optional, Sequence

from ..auth.middleware import ensure_self_or_elevated
from ..auth.model import Principal
from ..common.validators import parse_date_field, parse_optional_int, text_field
from ..core.enums import TaskStatus
from ..core.exceptions import Forbidden, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import Task
from .repository import TaskRepository


def _parse_status(value: Optional[str], *, required: bool = False) -> Optional[TaskStatus]:
    if not value:
        if required:
            raise ValidationError('Invalid status. Must be "To Do", "In Progress", or "Done"')
        return None
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValidationError('Invalid status. Must be "To Do", "In Progress", or "Done"')


class TaskService:
    """Task assignment.

    Employees work on their own tasks only; admin/hr can assign, view, and
    delete anyone's.
    """

    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self._tasks = tasks
        self._users = users

    def create_task(
        self,
        principal: Principal,
        *,
        title: Optional[str],
        description: Optional[str] = None,
        due_date: Optional[str] = None,
        assigned_to=None,
    ) -> Task:
        title = text_field(title, "title")
        description = text_field(description, "description")
        if not title:
            raise ValidationError("Please provide a task title")

        assignee = parse_optional_int(assigned_to, "assignedTo") or principal.user_id
        if assignee != principal.user_id and not principal.is_elevated:
            raise Forbidden("You can only create tasks for yourself")

        # Elevated users handing work to someone else start it as "To Do";
        # self-created tasks are already in progress.
        status = TaskStatus.TODO if assignee != principal.user_id else TaskStatus.IN_PROGRESS

        if not self._users.get_by_id(assignee):
            raise NotFoundError("Assigned user not found")

        return self._tasks.create_task(
            title=title,
            description=description or None,
            due_date=parse_date_field(due_date, "dueDate") if due_date else None,
            status=status,
            assigned_to=assignee,
            created_by=principal.user_id,
        )

    def list_tasks(self, principal: Principal, *, status: Optional[str] = None, assigned_to=None) -> Sequence[Task]:
        if principal.is_elevated:
            assignee = parse_optional_int(assigned_to, "assignedTo")
        else:
            assignee = principal.user_id
        return self._tasks.list_tasks(assigned_to=assignee, status=_parse_status(status))

    def get_task(self, principal: Principal, task_id: int) -> Task:
        task = self._tasks.get_task(int(task_id))
        if not task:
            raise NotFoundError("Task not found")
        ensure_self_or_elevated(principal, task.assigned_to)
        return task

    def update_status(self, principal: Principal, task_id: int, status: Optional[str]) -> Task:
        parsed = _parse_status(status, required=True)
        self.get_task(principal, task_id)

        updated = self._tasks.update_status(task_id=int(task_id), status=parsed)
        if not updated:
            raise NotFoundError("Task not found")
        return updated

    def delete_task(self, task_id: int) -> None:
        if not self._tasks.get_task(int(task_id)):
            raise NotFoundError("Task not found")
        self._tasks.delete_task(int(task_id))
