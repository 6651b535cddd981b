from __future__ import annotations

from enum import Enum


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"

    @property
    def is_resolved(self) -> bool:
        return self is not RequestStatus.PENDING
