from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from orgjoin.application.errors import AppError, NotFound
from orgjoin.application.interfaces.unit_of_work import UnitOfWork
from orgjoin.domain.models.membership_request import MembershipRequest

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RequesterProfile:
    id: UUID
    email: str
    first_name: str
    last_name: str


@dataclass(slots=True)
class PendingRequestResult:
    request: MembershipRequest
    requester: RequesterProfile | None


async def get_pending_requests(uow: UnitOfWork, organization_id: str) -> list[MembershipRequest]:
    if not await uow.organizations.exists(organization_id):
        raise NotFound("Organization not found")
    return await uow.membership_requests.list_pending(organization_id)


async def _lookup_requester(uow: UnitOfWork, user_id: UUID) -> RequesterProfile | None:
    try:
        user = await uow.users.get(user_id)
    except AppError as exc:
        logger.warning("Requester lookup failed for user %s: %s", user_id, exc.message)
        return None
    if user is None:
        logger.warning("Requester %s not found in user directory", user_id)
        return None
    return RequesterProfile(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )


async def execute(uow: UnitOfWork, organization_id: str) -> list[PendingRequestResult]:
    """Pending requests for an organization with a snapshot of each requester.

    A requester that cannot be looked up yields `requester=None` instead of
    failing the listing.
    """
    requests = await get_pending_requests(uow, organization_id)
    results = []
    for request in requests:
        results.append(
            PendingRequestResult(
                request=request,
                requester=await _lookup_requester(uow, request.user_id),
            )
        )
    return results
