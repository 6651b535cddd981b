from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from orgjoin.application.errors import AppError
from orgjoin.application.interfaces.unit_of_work import UnitOfWork
from orgjoin.application.notifications.factory import (
    PRODUCT_NAME,
    NotificationPayload,
    build_notification_payload,
)
from orgjoin.application.use_cases.membership_requests import approve_request, deny_request
from orgjoin.domain.models.membership import Membership
from orgjoin.domain.models.membership_request import MembershipRequest
from orgjoin.domain.value_objects.decision import Decision

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolutionOutcome:
    decision: Decision
    result: Membership | MembershipRequest
    notification: NotificationPayload | None = None


async def _notification_for(
    uow: UnitOfWork,
    organization_id: str,
    user_id: UUID,
    decision: Decision,
    product_name: str,
) -> NotificationPayload | None:
    # The transition is already committed here; lookup problems only drop the e-mail
    try:
        member = await uow.users.get(user_id)
    except AppError as exc:
        logger.warning("Skipping notification for user %s: %s", user_id, exc.message)
        return None
    if member is None:
        logger.info("Skipping notification for user %s: profile not found", user_id)
        return None
    return build_notification_payload(
        decision.resulting_status,
        organization_id,
        member.email,
        product_name=product_name,
    )


async def execute(
    uow: UnitOfWork,
    organization_id: str,
    user_id: UUID,
    decision: Decision,
    *,
    product_name: str = PRODUCT_NAME,
) -> ResolutionOutcome:
    if decision is Decision.APPROVE:
        result: Membership | MembershipRequest = await approve_request.execute(
            uow, organization_id, user_id
        )
    else:
        result = await deny_request.execute(uow, organization_id, user_id)

    notification = await _notification_for(
        uow, organization_id, user_id, decision, product_name
    )
    return ResolutionOutcome(decision=decision, result=result, notification=notification)
