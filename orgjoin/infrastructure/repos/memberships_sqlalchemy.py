from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from orgjoin.application.errors import ConflictError
from orgjoin.application.interfaces.repositories.memberships import MembershipRepository
from orgjoin.domain.models.membership import Membership
from orgjoin.domain.value_objects.role import Role
from orgjoin.infrastructure.db.orm.membership import MembershipORM
from orgjoin.utils.datetime_tz import ensure_utc


class MembershipsSQLAlchemyRepository(MembershipRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: MembershipORM) -> Membership:
        return Membership(
            organization_id=orm.organization_id,
            user_id=orm.user_id,
            role=orm.role,
            joined_at=ensure_utc(orm.joined_at),
        )

    async def add(self, membership: Membership) -> None:
        orm = MembershipORM(
            organization_id=membership.organization_id,
            user_id=membership.user_id,
            role=membership.role,
            joined_at=membership.joined_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("User is already a member of this organization") from exc

    async def get(self, organization_id: str, user_id: UUID) -> Membership | None:
        stmt = (
            select(MembershipORM)
            .where(MembershipORM.organization_id == organization_id)
            .where(MembershipORM.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        return self._to_domain(row) if row else None

    async def list_for_user(self, user_id: UUID) -> list[Membership]:
        stmt = select(MembershipORM).where(MembershipORM.user_id == user_id)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def get_role(self, user_id: UUID, organization_id: str) -> Role | None:
        membership = await self.get(organization_id, user_id)
        return membership.role if membership else None
