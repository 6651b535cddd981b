from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from orgjoin.application.errors import ConflictError
from orgjoin.application.interfaces.unit_of_work import UnitOfWork
from orgjoin.application.use_cases.membership_requests.common import no_pending_request_error
from orgjoin.domain.models.membership import Membership
from orgjoin.domain.value_objects.request_status import RequestStatus
from orgjoin.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, organization_id: str, user_id: UUID) -> Membership:
    resolved = await uow.membership_requests.resolve_pending(
        organization_id,
        user_id,
        RequestStatus.APPROVED,
        resolved_at=datetime.now(timezone.utc),
    )
    if resolved is None:
        raise await no_pending_request_error(uow, organization_id, user_id)

    membership = Membership(
        organization_id=organization_id,
        user_id=user_id,
        role=Role.MEMBER,
        joined_at=resolved.resolved_at or datetime.now(timezone.utc),
    )
    # Status change and membership commit together or not at all
    try:
        await uow.memberships.add(membership)
    except ConflictError:
        await uow.rollback()
        raise
    await uow.commit()
    logger.info(
        "Membership request %s approved: organization=%s user=%s",
        resolved.id,
        organization_id,
        user_id,
    )
    return membership
