from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, user_id: int, work_date: date, check_in: datetime) -> AttendanceRecord:
        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        user_id: Optional[int] = None,
        work_date: Optional[date] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
