from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in/check-out pair per user per day."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in: datetime
    check_out: Optional[datetime] = None
    # Populated by admin listings that join users.
    user_name: Optional[str] = None
    user_email: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "checkIn": isoformat_or_none(self.check_in),
            "checkOut": isoformat_or_none(self.check_out),
        }
        if self.user_name is not None:
            data["name"] = self.user_name
            data["email"] = self.user_email
        return data
