from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"

    def can_review_requests(self) -> bool:
        return self is Role.ADMIN
