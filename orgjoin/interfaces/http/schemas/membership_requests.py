from __future__ import annotations

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel

from orgjoin.application.use_cases.membership_requests.list_pending_requests import (
    PendingRequestResult,
)
from orgjoin.domain.models.membership import Membership
from orgjoin.domain.models.membership_request import MembershipRequest
from orgjoin.domain.value_objects.request_status import RequestStatus
from orgjoin.domain.value_objects.role import Role


class ApplyRequest(BaseModel):
    message: str | None = None


class MembershipRequestSchema(BaseModel):
    id: UUID
    organization_id: str
    user_id: UUID
    message: str | None
    status: RequestStatus
    created_at: datetime
    resolved_at: datetime | None = None

    @classmethod
    def from_domain(cls, request: MembershipRequest) -> MembershipRequestSchema:
        return cls(
            id=request.id,
            organization_id=request.organization_id,
            user_id=request.user_id,
            message=request.message,
            status=request.status,
            created_at=request.created_at,
            resolved_at=request.resolved_at,
        )


class MembershipSchema(BaseModel):
    organization_id: str
    user_id: UUID
    role: Role
    joined_at: datetime

    @classmethod
    def from_domain(cls, membership: Membership) -> MembershipSchema:
        return cls(
            organization_id=membership.organization_id,
            user_id=membership.user_id,
            role=membership.role,
            joined_at=membership.joined_at,
        )


class UserDetailsSchema(BaseModel):
    id: UUID
    email: str
    first_name: str
    last_name: str


class PendingRequestSchema(MembershipRequestSchema):
    user_details: UserDetailsSchema | None = None

    @classmethod
    def from_result(cls, item: PendingRequestResult) -> PendingRequestSchema:
        details = None
        if item.requester is not None:
            details = UserDetailsSchema(
                id=item.requester.id,
                email=item.requester.email,
                first_name=item.requester.first_name,
                last_name=item.requester.last_name,
            )
        base = MembershipRequestSchema.from_domain(item.request)
        return cls(**base.model_dump(), user_details=details)


class SuccessResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str | None = None


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    code: str
    message: str
    details: dict[str, Any] | None = None


class RequestData(BaseModel):
    request: MembershipRequestSchema


class RequestResponse(SuccessResponse):
    data: RequestData


class PendingRequestsData(BaseModel):
    requests: list[PendingRequestSchema]


class PendingRequestsResponse(SuccessResponse):
    data: PendingRequestsData


class MembershipData(BaseModel):
    membership: MembershipSchema


class MembershipResponse(SuccessResponse):
    data: MembershipData
