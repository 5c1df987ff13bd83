from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT, DEFAULT_HISTORY_LIMIT
from ..core.exceptions import ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def check_in(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        if self._attendance.get_for_user_and_date(user_id, today):
            raise ValidationError("You have already checked in today")

        return self._attendance.create_checkin(user_id=user_id, work_date=today, check_in=now)

    def check_out(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()

        record = self._attendance.get_for_user_and_date(user_id, now.date())
        if not record:
            raise ValidationError("You have not checked in today")
        if record.check_out is not None:
            raise ValidationError("You have already checked out today")

        updated = self._attendance.update_checkout(attendance_id=record.attendance_id, check_out=now)
        if not updated:
            raise ValidationError("You have already checked out today")
        return updated

    def today_status(self, user_id: int, *, now: datetime | None = None) -> dict:
        today = (now or now_local()).date()
        record = self._attendance.get_for_user_and_date(user_id, today)
        return {
            "hasCheckedIn": record is not None,
            "hasCheckedOut": record is not None and record.check_out is not None,
            "attendance": record.to_dict() if record else None,
        }

    def my_records(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        if limit <= 0:
            raise ValidationError("limit must be positive")
        return self._attendance.get_recent_for_user(user_id, limit)

    def all_records(
        self,
        *,
        user_id: Optional[int] = None,
        work_date: Optional[date] = None,
        limit: int = DEFAULT_ADMIN_LIST_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        if limit <= 0:
            raise ValidationError("limit must be positive")
        return self._attendance.list_all(user_id=user_id, work_date=work_date, limit=limit)
