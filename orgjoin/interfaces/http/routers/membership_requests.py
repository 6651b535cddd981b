from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends

from orgjoin.infrastructure.email.dispatcher import deliver_notification
from orgjoin.application.use_cases.membership_requests import (
    apply_to_organization,
    list_pending_requests,
    resolve_request,
)
from orgjoin.config.settings import Settings
from orgjoin.domain.value_objects.decision import Decision
from orgjoin.infrastructure.auth.context import AuthContext
from orgjoin.infrastructure.email.models import EmailService
from orgjoin.infrastructure.email.renderer.engine import EmailTemplateRenderer
from orgjoin.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_email_renderer,
    get_email_service,
    get_org_admin_context,
    get_uow,
)
from orgjoin.interfaces.http.schemas.membership_requests import (
    ApplyRequest,
    MembershipData,
    MembershipRequestSchema,
    MembershipResponse,
    MembershipSchema,
    PendingRequestSchema,
    PendingRequestsData,
    PendingRequestsResponse,
    RequestData,
    RequestResponse,
)

router = APIRouter(prefix="/organizations", tags=["membership-requests"])
logger = logging.getLogger(__name__)


@router.post("/{organization_id}", response_model=RequestResponse, status_code=201)
async def apply_to_organization_endpoint(
    organization_id: str,
    payload: ApplyRequest | None = None,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
) -> RequestResponse:
    created = await apply_to_organization.execute(
        uow,
        apply_to_organization.ApplyToOrganizationInput(
            organization_id=organization_id,
            user_id=context.user_id,
            message=payload.message if payload else None,
        ),
        allow_reapply_after_denial=settings.allow_reapply_after_denial,
    )
    return RequestResponse(
        message="Application submitted successfully",
        data=RequestData(request=MembershipRequestSchema.from_domain(created)),
    )


@router.get("/{organization_id}/requests", response_model=PendingRequestsResponse)
async def list_pending_requests_endpoint(
    organization_id: str,
    _: AuthContext = Depends(get_org_admin_context),
    uow=Depends(get_uow),
) -> PendingRequestsResponse:
    results = await list_pending_requests.execute(uow, organization_id)
    return PendingRequestsResponse(
        data=PendingRequestsData(
            requests=[PendingRequestSchema.from_result(item) for item in results]
        )
    )


async def _resolve(
    organization_id: str,
    user_id: UUID,
    decision: Decision,
    *,
    uow,
    settings: Settings,
    background_tasks: BackgroundTasks,
    email_service: EmailService,
    renderer: EmailTemplateRenderer,
) -> resolve_request.ResolutionOutcome:
    outcome = await resolve_request.execute(
        uow,
        organization_id,
        user_id,
        decision,
        product_name=settings.product_name,
    )
    if outcome.notification is not None:
        # Sent once the response has been emitted
        background_tasks.add_task(
            deliver_notification,
            outcome.notification,
            email_service=email_service,
            renderer=renderer,
            settings=settings,
        )
    return outcome


@router.put("/{organization_id}/requests/{user_id}", response_model=MembershipResponse)
async def approve_request_endpoint(
    organization_id: str,
    user_id: UUID,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_org_admin_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
    email_service: EmailService = Depends(get_email_service),
    renderer: EmailTemplateRenderer = Depends(get_email_renderer),
) -> MembershipResponse:
    outcome = await _resolve(
        organization_id,
        user_id,
        Decision.APPROVE,
        uow=uow,
        settings=settings,
        background_tasks=background_tasks,
        email_service=email_service,
        renderer=renderer,
    )
    logger.info("Admin %s approved %s for %s", context.user_id, user_id, organization_id)
    return MembershipResponse(
        message="Membership request approved",
        data=MembershipData(membership=MembershipSchema.from_domain(outcome.result)),
    )


@router.delete("/{organization_id}/requests/{user_id}", response_model=RequestResponse)
async def deny_request_endpoint(
    organization_id: str,
    user_id: UUID,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_org_admin_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
    email_service: EmailService = Depends(get_email_service),
    renderer: EmailTemplateRenderer = Depends(get_email_renderer),
) -> RequestResponse:
    outcome = await _resolve(
        organization_id,
        user_id,
        Decision.DENY,
        uow=uow,
        settings=settings,
        background_tasks=background_tasks,
        email_service=email_service,
        renderer=renderer,
    )
    logger.info("Admin %s denied %s for %s", context.user_id, user_id, organization_id)
    return RequestResponse(
        message="Membership request denied",
        data=RequestData(request=MembershipRequestSchema.from_domain(outcome.result)),
    )
