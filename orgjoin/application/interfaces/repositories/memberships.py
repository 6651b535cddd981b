from __future__ import annotations

from typing import Protocol
from uuid import UUID

from orgjoin.domain.models.membership import Membership
from orgjoin.domain.value_objects.role import Role


class MembershipRepository(Protocol):
    async def add(self, membership: Membership) -> None: ...

    async def get(self, organization_id: str, user_id: UUID) -> Membership | None: ...

    async def list_for_user(self, user_id: UUID) -> list[Membership]: ...

    async def get_role(self, user_id: UUID, organization_id: str) -> Role | None: ...
