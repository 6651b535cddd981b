from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from orgjoin.application.interfaces.unit_of_work import UnitOfWork
from orgjoin.application.use_cases.membership_requests.common import no_pending_request_error
from orgjoin.domain.models.membership_request import MembershipRequest
from orgjoin.domain.value_objects.request_status import RequestStatus

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, organization_id: str, user_id: UUID) -> MembershipRequest:
    resolved = await uow.membership_requests.resolve_pending(
        organization_id,
        user_id,
        RequestStatus.DENIED,
        resolved_at=datetime.now(timezone.utc),
    )
    if resolved is None:
        raise await no_pending_request_error(uow, organization_id, user_id)
    await uow.commit()
    logger.info(
        "Membership request %s denied: organization=%s user=%s",
        resolved.id,
        organization_id,
        user_id,
    )
    return resolved
