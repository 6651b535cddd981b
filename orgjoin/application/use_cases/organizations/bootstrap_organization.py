from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from orgjoin.application.errors import ConflictError, ValidationError
from orgjoin.application.interfaces.unit_of_work import UnitOfWork
from orgjoin.domain.models.membership import Membership
from orgjoin.domain.models.organization import Organization
from orgjoin.domain.models.user import User
from orgjoin.domain.value_objects.role import Role


@dataclass(slots=True)
class BootstrapOrganizationInput:
    organization_id: str
    admin_email: str
    description: str | None = None
    first_name: str = ""
    last_name: str = ""


@dataclass(slots=True)
class BootstrapOrganizationResult:
    organization_id: str
    admin_user_id: UUID
    admin_email: str
    created_user: bool


async def execute(
    *, uow: UnitOfWork, payload: BootstrapOrganizationInput
) -> BootstrapOrganizationResult:
    organization_id = payload.organization_id.strip()
    if not organization_id:
        raise ValidationError("Organization name is required")
    if await uow.organizations.exists(organization_id):
        raise ConflictError("Organization already exists")

    await uow.organizations.add(
        Organization(id=organization_id, description=payload.description)
    )

    user = await uow.users.get_by_email(payload.admin_email)
    created_user = False
    if user is None:
        user = await uow.users.add(
            User.create(
                email=payload.admin_email,
                first_name=payload.first_name,
                last_name=payload.last_name,
            )
        )
        created_user = True

    await uow.memberships.add(
        Membership(organization_id=organization_id, user_id=user.id, role=Role.ADMIN)
    )
    await uow.commit()
    return BootstrapOrganizationResult(
        organization_id=organization_id,
        admin_user_id=user.id,
        admin_email=user.email,
        created_user=created_user,
    )
