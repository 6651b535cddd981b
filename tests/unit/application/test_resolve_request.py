from __future__ import annotations

from uuid import uuid4

import pytest

from orgjoin.application.errors import NotFound
from orgjoin.application.use_cases.membership_requests import (
    apply_to_organization,
    resolve_request,
)
from orgjoin.domain.models.membership import Membership
from orgjoin.domain.models.membership_request import MembershipRequest
from orgjoin.domain.value_objects.decision import Decision
from orgjoin.domain.value_objects.request_status import RequestStatus


async def _apply(uow, user_id):
    await apply_to_organization.execute(
        uow,
        apply_to_organization.ApplyToOrganizationInput(organization_id="acme", user_id=user_id),
    )


async def test_approve_returns_membership_and_notification(uow, applicant):
    await _apply(uow, applicant.id)

    outcome = await resolve_request.execute(uow, "acme", applicant.id, Decision.APPROVE)

    assert outcome.decision is Decision.APPROVE
    assert isinstance(outcome.result, Membership)
    assert outcome.notification is not None
    assert outcome.notification.to == "applicant@example.com"
    assert outcome.notification.header == (
        "Your membership application for acme has been approved!"
    )


async def test_deny_returns_request_and_notification(uow, applicant):
    await _apply(uow, applicant.id)

    outcome = await resolve_request.execute(
        uow, "acme", applicant.id, Decision.DENY, product_name="Acme Cloud"
    )

    assert isinstance(outcome.result, MembershipRequest)
    assert outcome.result.status is RequestStatus.DENIED
    assert outcome.notification.subject == "An update from Acme Cloud!"
    assert "denied" in outcome.notification.header


async def test_missing_profile_skips_notification_but_keeps_transition(uow):
    user_id = uuid4()
    await _apply(uow, user_id)

    outcome = await resolve_request.execute(uow, "acme", user_id, Decision.APPROVE)

    assert outcome.notification is None
    assert ("acme", user_id) in uow.memberships.items


async def test_directory_failure_skips_notification(uow, applicant):
    await _apply(uow, applicant.id)
    uow.users.unavailable_for.add(applicant.id)

    outcome = await resolve_request.execute(uow, "acme", applicant.id, Decision.DENY)

    assert outcome.notification is None
    latest = await uow.membership_requests.get_latest("acme", applicant.id)
    assert latest.status is RequestStatus.DENIED
    assert uow.rollbacks == 0


async def test_failed_transition_propagates(uow, applicant):
    with pytest.raises(NotFound):
        await resolve_request.execute(uow, "acme", applicant.id, Decision.APPROVE)
