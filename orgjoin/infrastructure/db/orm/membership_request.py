from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, Index, String, Text, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column

from orgjoin.domain.value_objects.request_status import RequestStatus
from orgjoin.infrastructure.db.base import Base

PENDING_ONLY = text("status = 'pending'")


class MembershipRequestORM(Base):
    __tablename__ = "membership_requests"
    __table_args__ = (
        # At most one pending request per (organization, user)
        Index(
            "ux_membership_requests_pending",
            "organization_id",
            "user_id",
            unique=True,
            sqlite_where=PENDING_ONLY,
            postgresql_where=PENDING_ONLY,
        ),
        Index("ix_membership_requests_org_status", "organization_id", "status", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    organization_id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[RequestStatus] = mapped_column(
        Enum(
            RequestStatus,
            native_enum=False,
            length=16,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=RequestStatus.PENDING,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
