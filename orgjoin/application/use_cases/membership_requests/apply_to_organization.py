from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from orgjoin.application.errors import ConflictError, NotFound, ValidationError
from orgjoin.application.interfaces.unit_of_work import UnitOfWork
from orgjoin.domain.models.membership_request import MembershipRequest
from orgjoin.domain.value_objects.request_status import RequestStatus

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 1000


@dataclass(slots=True)
class ApplyToOrganizationInput:
    organization_id: str
    user_id: UUID
    message: str | None = None


async def execute(
    uow: UnitOfWork,
    payload: ApplyToOrganizationInput,
    *,
    allow_reapply_after_denial: bool = True,
) -> MembershipRequest:
    message = (payload.message or "").strip() or None
    if message is not None and len(message) > MAX_MESSAGE_LENGTH:
        raise ValidationError(f"Message must be at most {MAX_MESSAGE_LENGTH} characters")

    if not await uow.organizations.exists(payload.organization_id):
        raise NotFound("Organization not found")

    role = await uow.memberships.get_role(payload.user_id, payload.organization_id)
    if role is not None:
        raise ConflictError("User is already a member of this organization")

    latest = await uow.membership_requests.get_latest(payload.organization_id, payload.user_id)
    if latest is not None:
        if latest.is_pending:
            raise ConflictError("A pending request already exists for this organization")
        if latest.status is RequestStatus.DENIED and not allow_reapply_after_denial:
            raise ConflictError(
                "Re-application after denial is not allowed",
                details={"current_status": latest.status.value},
            )

    request = MembershipRequest.create(
        organization_id=payload.organization_id,
        user_id=payload.user_id,
        message=message,
    )
    # The store rejects a second pending row, which also covers concurrent applies
    created = await uow.membership_requests.add(request)
    await uow.commit()
    logger.info(
        "Membership request %s submitted: organization=%s user=%s",
        created.id,
        created.organization_id,
        created.user_id,
    )
    return created
