from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskStatus
from .model import Task


class TaskRepository(Protocol):
    def create_task(
        self,
        *,
        title: str,
        description: Optional[str],
        due_date: Optional[date],
        status: TaskStatus,
        assigned_to: int,
        created_by: int,
    ) -> Task:
        raise NotImplementedError

    def get_task(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def list_tasks(
        self,
        *,
        assigned_to: Optional[int] = None,
        status: Optional[TaskStatus] = None,
    ) -> Sequence[Task]:
        raise NotImplementedError

    def update_status(self, *, task_id: int, status: TaskStatus) -> Optional[Task]:
        raise NotImplementedError

    def delete_task(self, task_id: int) -> bool:
        raise NotImplementedError
