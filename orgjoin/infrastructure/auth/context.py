from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from orgjoin.application.errors import PermissionDenied
from orgjoin.domain.models.membership import Membership
from orgjoin.domain.models.user import User
from orgjoin.domain.value_objects.role import Role
from orgjoin.infrastructure.repos.memberships_sqlalchemy import MembershipsSQLAlchemyRepository
from orgjoin.infrastructure.repos.users_sqlalchemy import UsersSQLAlchemyRepository


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    memberships: list[Membership]

    def role_in(self, organization_id: str) -> Role | None:
        for membership in self.memberships:
            if membership.organization_id == organization_id:
                return membership.role
        return None

    def require_admin(self, organization_id: str) -> None:
        role = self.role_in(organization_id)
        if role is None or not role.can_review_requests():
            raise PermissionDenied("Only organization admins can review membership requests")


async def fetch_user(session: AsyncSession, user_id: UUID) -> User | None:
    return await UsersSQLAlchemyRepository(session).get(user_id)


async def fetch_memberships(session: AsyncSession, user_id: UUID) -> list[Membership]:
    return await MembershipsSQLAlchemyRepository(session).list_for_user(user_id)
