from __future__ import annotations

from typing import Protocol

from orgjoin.application.interfaces.repositories.membership_requests import (
    MembershipRequestRepository,
)
from orgjoin.application.interfaces.repositories.memberships import MembershipRepository
from orgjoin.application.interfaces.repositories.organizations import OrganizationRepository
from orgjoin.application.interfaces.repositories.users import UserRepository


class UnitOfWork(Protocol):
    organizations: OrganizationRepository
    users: UserRepository
    memberships: MembershipRepository
    membership_requests: MembershipRequestRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
