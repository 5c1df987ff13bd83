from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = "lr.id, lr.user_id, lr.start_date, lr.end_date, lr.reason, lr.status, lr.created_at, lr.updated_at"


def _row_to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        user_id=int(r["user_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        user_name=r.get("name"),
        user_email=r.get("email"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(self, *, user_id: int, start_date: date, end_date: date, reason: str) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests lr WHERE lr.id=%s", (int(cur.lastrowid),))
            return _row_to_leave(fetchone(cur))

    def get_leave(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests lr WHERE lr.id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def list_leaves(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("lr.status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("lr.user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.name, u.email
                FROM leave_requests lr
                JOIN users u ON lr.user_id = u.id
                {build_where(clauses)}
                ORDER BY lr.created_at DESC
                """,
                tuple(params),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def update_status(self, *, request_id: int, status: LeaveStatus) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_requests SET status=%s, updated_at=CURRENT_TIMESTAMP WHERE id=%s",
                (status.value, int(request_id)),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests lr WHERE lr.id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None
