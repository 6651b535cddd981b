from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from orgjoin.domain.value_objects.request_status import RequestStatus


@dataclass(slots=True, frozen=True)
class MembershipRequest:
    """A user's application to join an organization.

    Created pending and resolved exactly once. Resolved requests are kept as
    an audit trail, so a pair may own several resolved requests but never
    more than one pending request.
    """

    id: UUID
    organization_id: str
    user_id: UUID
    message: str | None = None
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resolved_at: datetime | None = None

    @classmethod
    def create(
        cls, organization_id: str, user_id: UUID, message: str | None = None
    ) -> MembershipRequest:
        return cls(
            id=uuid4(),
            organization_id=organization_id,
            user_id=user_id,
            message=message,
            status=RequestStatus.PENDING,
            created_at=datetime.now(timezone.utc),
            resolved_at=None,
        )

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.PENDING
