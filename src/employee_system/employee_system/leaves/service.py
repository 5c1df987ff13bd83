from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import parse_date_field, require_fields, text_field
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import LeaveRequest
from .repository import LeaveRepository


def _parse_status(value: Optional[str]) -> Optional[LeaveStatus]:
    if not value:
        return None
    try:
        return LeaveStatus(value)
    except ValueError:
        raise ValidationError("Invalid status. Must be Pending, Approved, or Declined")


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def create_leave(self, *, user_id: int, start_date: str, end_date: str, reason: str) -> LeaveRequest:
        reason = text_field(reason, "reason")
        require_fields(
            {"startDate": start_date, "endDate": end_date, "reason": reason},
            "startDate",
            "endDate",
            "reason",
            message="Please provide startDate, endDate, and reason",
        )
        start = parse_date_field(start_date, "startDate")
        end = parse_date_field(end_date, "endDate")
        if start > end:
            raise ValidationError("Start date must be before or equal to end date")

        return self._leaves.create_leave(user_id=int(user_id), start_date=start, end_date=end, reason=reason)

    def my_requests(self, user_id: int, *, status: Optional[str] = None) -> Sequence[LeaveRequest]:
        return self._leaves.list_leaves(status=_parse_status(status), user_id=int(user_id))

    def all_requests(self, *, status: Optional[str] = None, user_id: Optional[int] = None) -> Sequence[LeaveRequest]:
        return self._leaves.list_leaves(status=_parse_status(status), user_id=user_id)

    def update_status(self, *, request_id: int, status: Optional[str]) -> LeaveRequest:
        parsed = _parse_status(status)
        if parsed is None:
            raise ValidationError("Invalid status. Must be Pending, Approved, or Declined")

        if not self._leaves.get_leave(request_id):
            raise NotFoundError("Leave request not found")

        updated = self._leaves.update_status(request_id=int(request_id), status=parsed)
        if not updated:
            raise NotFoundError("Leave request not found")
        return updated
