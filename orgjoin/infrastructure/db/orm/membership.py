from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from orgjoin.domain.value_objects.role import Role
from orgjoin.infrastructure.db.base import Base


class MembershipORM(Base):
    __tablename__ = "memberships"
    # Composite primary key: one membership per (organization, user)

    organization_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    user_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    role: Mapped[Role] = mapped_column(Enum(Role, native_enum=False), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
