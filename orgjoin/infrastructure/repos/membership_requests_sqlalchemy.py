from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from orgjoin.application.errors import ConflictError
from orgjoin.application.interfaces.repositories.membership_requests import (
    MembershipRequestRepository,
)
from orgjoin.domain.models.membership_request import MembershipRequest
from orgjoin.domain.value_objects.request_status import RequestStatus
from orgjoin.infrastructure.db.orm.membership_request import MembershipRequestORM
from orgjoin.utils.datetime_tz import ensure_utc


class MembershipRequestsSQLAlchemyRepository(MembershipRequestRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: MembershipRequestORM) -> MembershipRequest:
        return MembershipRequest(
            id=orm.id,
            organization_id=orm.organization_id,
            user_id=orm.user_id,
            message=orm.message,
            status=orm.status,
            created_at=ensure_utc(orm.created_at),
            resolved_at=ensure_utc(orm.resolved_at),
        )

    async def add(self, request: MembershipRequest) -> MembershipRequest:
        orm = MembershipRequestORM(
            id=request.id,
            organization_id=request.organization_id,
            user_id=request.user_id,
            message=request.message,
            status=request.status,
            created_at=request.created_at,
            resolved_at=request.resolved_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("A pending request already exists for this organization") from exc
        return self._to_domain(orm)

    async def get_latest(self, organization_id: str, user_id: UUID) -> MembershipRequest | None:
        stmt = (
            select(MembershipRequestORM)
            .where(MembershipRequestORM.organization_id == organization_id)
            .where(MembershipRequestORM.user_id == user_id)
            .order_by(MembershipRequestORM.created_at.desc(), MembershipRequestORM.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_pending(self, organization_id: str) -> list[MembershipRequest]:
        stmt = (
            select(MembershipRequestORM)
            .where(MembershipRequestORM.organization_id == organization_id)
            .where(MembershipRequestORM.status == RequestStatus.PENDING)
            .order_by(MembershipRequestORM.created_at.asc(), MembershipRequestORM.id.asc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def resolve_pending(
        self,
        organization_id: str,
        user_id: UUID,
        status: RequestStatus,
        resolved_at: datetime,
    ) -> MembershipRequest | None:
        # Conditional update: only the caller that still sees `pending` wins
        stmt = (
            update(MembershipRequestORM)
            .where(MembershipRequestORM.organization_id == organization_id)
            .where(MembershipRequestORM.user_id == user_id)
            .where(MembershipRequestORM.status == RequestStatus.PENDING)
            .values(status=status, resolved_at=resolved_at)
            .returning(MembershipRequestORM)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        if not orm:
            return None
        return self._to_domain(orm)
