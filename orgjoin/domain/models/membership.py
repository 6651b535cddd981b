from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from orgjoin.domain.value_objects.role import Role


@dataclass(slots=True, frozen=True)
class Membership:
    """Active membership of a user in an organization."""

    organization_id: str
    user_id: UUID
    role: Role = Role.MEMBER
    joined_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
