from __future__ import annotations

from typing import Protocol

from orgjoin.domain.models.organization import Organization


class OrganizationRepository(Protocol):
    async def add(self, organization: Organization) -> Organization: ...

    async def exists(self, organization_id: str) -> bool: ...
