from __future__ import annotations

from uuid import uuid4

from orgjoin.domain.models.membership_request import MembershipRequest
from orgjoin.domain.value_objects.decision import Decision
from orgjoin.domain.value_objects.request_status import RequestStatus
from orgjoin.domain.value_objects.role import Role


def test_decision_maps_to_resolved_status():
    assert Decision.APPROVE.resulting_status is RequestStatus.APPROVED
    assert Decision.DENY.resulting_status is RequestStatus.DENIED
    assert Decision.APPROVE.resulting_status.is_resolved
    assert not RequestStatus.PENDING.is_resolved


def test_only_admins_review_requests():
    assert Role.ADMIN.can_review_requests()
    assert not Role.MEMBER.can_review_requests()


def test_new_request_is_pending():
    request = MembershipRequest.create("acme", uuid4(), "hi")
    assert request.is_pending
    assert request.created_at.tzinfo is not None
    assert request.resolved_at is None
