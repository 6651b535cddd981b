from __future__ import annotations

from enum import Enum

from orgjoin.domain.value_objects.request_status import RequestStatus


class Decision(str, Enum):
    APPROVE = "approve"
    DENY = "deny"

    @property
    def resulting_status(self) -> RequestStatus:
        return RequestStatus.APPROVED if self is Decision.APPROVE else RequestStatus.DENIED
