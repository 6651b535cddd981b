from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from orgjoin.application.errors import ConflictError, UpstreamError
from orgjoin.application.interfaces.repositories.users import UserRepository
from orgjoin.domain.models.user import User
from orgjoin.infrastructure.db.orm.user import UserORM
from orgjoin.utils.datetime_tz import ensure_utc


class UsersSQLAlchemyRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: UserORM) -> User:
        return User(
            id=orm.id,
            email=orm.email,
            first_name=orm.first_name,
            last_name=orm.last_name,
            is_active=orm.is_active,
            created_at=ensure_utc(orm.created_at),
        )

    async def add(self, user: User) -> User:
        orm = UserORM(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            is_active=user.is_active,
            created_at=user.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Email already registered") from exc
        return self._to_domain(orm)

    async def get(self, user_id: UUID) -> User | None:
        stmt = select(UserORM).where(UserORM.id == user_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise UpstreamError("User directory unavailable") from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserORM).where(UserORM.email == email.lower())
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise UpstreamError("User directory unavailable") from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
