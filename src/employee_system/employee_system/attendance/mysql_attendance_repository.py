from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "a.id, a.user_id, a.date, a.check_in, a.check_out"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        user_id=int(r["user_id"]),
        work_date=r["date"],
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        user_name=r.get("name"),
        user_email=r.get("email"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE a.user_id=%s AND a.date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                WHERE a.user_id=%s
                ORDER BY a.date DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_checkin(self, *, user_id: int, work_date: date, check_in: datetime) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendance(user_id, check_in, date) VALUES(%s,%s,%s)",
                (int(user_id), check_in, work_date),
            )
            return AttendanceRecord(
                attendance_id=int(cur.lastrowid),
                user_id=int(user_id),
                work_date=work_date,
                check_in=check_in,
            )

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET check_out=%s WHERE id=%s AND check_out IS NULL",
                (check_out, int(attendance_id)),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM attendance a WHERE a.id=%s", (int(attendance_id),))
            return _row_to_record(fetchone(cur))

    def list_all(
        self,
        *,
        user_id: Optional[int] = None,
        work_date: Optional[date] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if user_id is not None:
            clauses.append("a.user_id=%s")
            params.append(int(user_id))
        if work_date is not None:
            clauses.append("a.date=%s")
            params.append(work_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.name, u.email
                FROM attendance a
                JOIN users u ON a.user_id = u.id
                {build_where(clauses)}
                ORDER BY a.date DESC, a.check_in DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
