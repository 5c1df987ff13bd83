from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import TaskStatus


@dataclass(frozen=True)
class Task:
    task_id: int
    title: str
    description: Optional[str]
    due_date: Optional[date]
    status: TaskStatus
    assigned_to: int
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    assigned_to_name: Optional[str] = None
    assigned_to_email: Optional[str] = None
    created_by_name: Optional[str] = None
    created_by_email: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.task_id,
            "title": self.title,
            "description": self.description,
            "dueDate": isoformat_or_none(self.due_date),
            "status": self.status.value,
            "assignedTo": self.assigned_to,
            "createdBy": self.created_by,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }
        if self.assigned_to_name is not None:
            data.update(
                assignedToName=self.assigned_to_name,
                assignedToEmail=self.assigned_to_email,
                createdByName=self.created_by_name,
                createdByEmail=self.created_by_email,
            )
        return data
