from __future__ import annotations

from uuid import UUID

from orgjoin.application.errors import NotFound
from orgjoin.application.interfaces.unit_of_work import UnitOfWork


async def no_pending_request_error(uow: UnitOfWork, organization_id: str, user_id: UUID) -> NotFound:
    # Already-resolved and never-applied both surface as NotFound; the former
    # carries the current status for diagnosis.
    latest = await uow.membership_requests.get_latest(organization_id, user_id)
    if latest is None or not latest.status.is_resolved:
        return NotFound("No pending membership request found")
    return NotFound(
        "No pending membership request found",
        details={"current_status": latest.status.value},
    )
