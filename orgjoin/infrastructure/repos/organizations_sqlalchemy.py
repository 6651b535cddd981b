from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from orgjoin.application.errors import ConflictError, UpstreamError
from orgjoin.application.interfaces.repositories.organizations import OrganizationRepository
from orgjoin.domain.models.organization import Organization
from orgjoin.infrastructure.db.orm.organization import OrganizationORM
from orgjoin.utils.datetime_tz import ensure_utc


class OrganizationsSQLAlchemyRepository(OrganizationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: OrganizationORM) -> Organization:
        return Organization(
            id=orm.id,
            description=orm.description,
            created_at=ensure_utc(orm.created_at),
        )

    async def add(self, organization: Organization) -> Organization:
        orm = OrganizationORM(
            id=organization.id,
            description=organization.description,
            created_at=organization.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Organization already exists") from exc
        return self._to_domain(orm)

    async def exists(self, organization_id: str) -> bool:
        stmt = select(OrganizationORM.id).where(OrganizationORM.id == organization_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise UpstreamError("Organization directory unavailable") from exc
        return result.scalar_one_or_none() is not None
