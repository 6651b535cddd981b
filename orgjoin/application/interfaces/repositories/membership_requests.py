from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from orgjoin.domain.models.membership_request import MembershipRequest
from orgjoin.domain.value_objects.request_status import RequestStatus


class MembershipRequestRepository(Protocol):
    async def add(self, request: MembershipRequest) -> MembershipRequest:
        """Persist a pending request.

        Raises ConflictError when the pair already has a pending request,
        including when a concurrent insert won the race.
        """
        ...

    async def get_latest(self, organization_id: str, user_id: UUID) -> MembershipRequest | None: ...

    async def list_pending(self, organization_id: str) -> list[MembershipRequest]: ...

    async def resolve_pending(
        self,
        organization_id: str,
        user_id: UUID,
        status: RequestStatus,
        resolved_at: datetime,
    ) -> MembershipRequest | None:
        """Atomically move the pair's pending request to `status`.

        Returns None when no pending request exists at the time of the update.
        """
        ...
