from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create_leave(self, *, user_id: int, start_date: date, end_date: date, reason: str) -> LeaveRequest:
        raise NotImplementedError

    def get_leave(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leaves(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def update_status(self, *, request_id: int, status: LeaveStatus) -> Optional[LeaveRequest]:
        raise NotImplementedError
