from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Task
from .repository import TaskRepository

_SELECT = """
    SELECT t.id, t.title, t.description, t.due_date, t.status,
           t.assigned_to, t.created_by, t.created_at, t.updated_at,
           u1.name AS assigned_to_name, u1.email AS assigned_to_email,
           u2.name AS created_by_name, u2.email AS created_by_email
    FROM tasks t
    JOIN users u1 ON t.assigned_to = u1.id
    JOIN users u2 ON t.created_by = u2.id
"""


def _row_to_task(r: dict) -> Task:
    return Task(
        task_id=int(r["id"]),
        title=r["title"],
        description=r.get("description"),
        due_date=r.get("due_date"),
        status=TaskStatus(r["status"]),
        assigned_to=int(r["assigned_to"]),
        created_by=int(r["created_by"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        assigned_to_name=r.get("assigned_to_name"),
        assigned_to_email=r.get("assigned_to_email"),
        created_by_name=r.get("created_by_name"),
        created_by_email=r.get("created_by_email"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(title, description, due_date, status, assigned_to, created_by)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (title, description, due_date, status.value, int(assigned_to), int(created_by)),
            )
            cur.execute(_SELECT + " WHERE t.id=%s", (int(cur.lastrowid),))
            return _row_to_task(fetchone(cur))

    def get_task(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE t.id=%s", (int(task_id),))
            r = fetchone(cur)
            return _row_to_task(r) if r else None

    def list_tasks(
        self,
        *,
        assigned_to: Optional[int] = None,
        status: Optional[TaskStatus] = None,
    ) -> Sequence[Task]:
        clauses: list[str] = []
        params: list[object] = []
        if assigned_to is not None:
            clauses.append("t.assigned_to=%s")
            params.append(int(assigned_to))
        if status is not None:
            clauses.append("t.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + build_where(clauses) + " ORDER BY t.created_at DESC", tuple(params))
            return [_row_to_task(r) for r in fetchall(cur)]

    def update_status(self, *, task_id: int, status: TaskStatus) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tasks SET status=%s, updated_at=CURRENT_TIMESTAMP WHERE id=%s",
                (status.value, int(task_id)),
            )
            cur.execute(_SELECT + " WHERE t.id=%s", (int(task_id),))
            r = fetchone(cur)
            return _row_to_task(r) if r else None

    def delete_task(self, task_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE id=%s", (int(task_id),))
            return cur.rowcount > 0
