from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime
from uuid import UUID

import pytest

from orgjoin.application.errors import ConflictError, UpstreamError
from orgjoin.domain.models.membership import Membership
from orgjoin.domain.models.membership_request import MembershipRequest
from orgjoin.domain.models.organization import Organization
from orgjoin.domain.models.user import User
from orgjoin.domain.value_objects.request_status import RequestStatus
from orgjoin.domain.value_objects.role import Role


async def _yield_control() -> None:
    # Lets concurrent callers interleave between reads and writes
    await asyncio.sleep(0)


class InMemoryOrganizations:
    def __init__(self) -> None:
        self.items: dict[str, Organization] = {}

    async def add(self, organization: Organization) -> Organization:
        if organization.id in self.items:
            raise ConflictError("Organization already exists")
        self.items[organization.id] = organization
        return organization

    async def exists(self, organization_id: str) -> bool:
        await _yield_control()
        return organization_id in self.items


class InMemoryUsers:
    def __init__(self) -> None:
        self.items: dict[UUID, User] = {}
        self.unavailable_for: set[UUID] = set()

    async def add(self, user: User) -> User:
        self.items[user.id] = user
        return user

    async def get(self, user_id: UUID) -> User | None:
        await _yield_control()
        if user_id in self.unavailable_for:
            raise UpstreamError("User directory unavailable")
        return self.items.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        for user in self.items.values():
            if user.email == email.lower():
                return user
        return None


class InMemoryMemberships:
    def __init__(self) -> None:
        self.items: dict[tuple[str, UUID], Membership] = {}

    async def add(self, membership: Membership) -> None:
        key = (membership.organization_id, membership.user_id)
        if key in self.items:
            raise ConflictError("User is already a member of this organization")
        self.items[key] = membership

    async def get(self, organization_id: str, user_id: UUID) -> Membership | None:
        await _yield_control()
        return self.items.get((organization_id, user_id))

    async def list_for_user(self, user_id: UUID) -> list[Membership]:
        return [m for (_, uid), m in self.items.items() if uid == user_id]

    async def get_role(self, user_id: UUID, organization_id: str) -> Role | None:
        membership = await self.get(organization_id, user_id)
        return membership.role if membership else None


class InMemoryMembershipRequests:
    """Record store whose writes are check-and-set without suspension points."""

    def __init__(self) -> None:
        self.rows: list[MembershipRequest] = []

    def _pending_index(self, organization_id: str, user_id: UUID) -> int | None:
        for index, row in enumerate(self.rows):
            if (
                row.organization_id == organization_id
                and row.user_id == user_id
                and row.status is RequestStatus.PENDING
            ):
                return index
        return None

    async def add(self, request: MembershipRequest) -> MembershipRequest:
        if self._pending_index(request.organization_id, request.user_id) is not None:
            raise ConflictError("A pending request already exists for this organization")
        self.rows.append(request)
        return request

    async def get_latest(self, organization_id: str, user_id: UUID) -> MembershipRequest | None:
        await _yield_control()
        matches = [
            row
            for row in self.rows
            if row.organization_id == organization_id and row.user_id == user_id
        ]
        return matches[-1] if matches else None

    async def list_pending(self, organization_id: str) -> list[MembershipRequest]:
        await _yield_control()
        pending = [
            row
            for row in self.rows
            if row.organization_id == organization_id and row.status is RequestStatus.PENDING
        ]
        return sorted(pending, key=lambda row: row.created_at)

    async def resolve_pending(
        self,
        organization_id: str,
        user_id: UUID,
        status: RequestStatus,
        resolved_at: datetime,
    ) -> MembershipRequest | None:
        index = self._pending_index(organization_id, user_id)
        if index is None:
            return None
        resolved = replace(self.rows[index], status=status, resolved_at=resolved_at)
        self.rows[index] = resolved
        return resolved


class InMemoryUnitOfWork:
    def __init__(self) -> None:
        self.organizations = InMemoryOrganizations()
        self.users = InMemoryUsers()
        self.memberships = InMemoryMemberships()
        self.membership_requests = InMemoryMembershipRequests()
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self) -> InMemoryUnitOfWork:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc:
            await self.rollback()

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture()
def uow() -> InMemoryUnitOfWork:
    unit = InMemoryUnitOfWork()
    unit.organizations.items["acme"] = Organization(id="acme", description="Acme photo club")
    return unit


@pytest.fixture()
def applicant(uow: InMemoryUnitOfWork) -> User:
    user = User.create("Applicant@Example.com", first_name="Ada", last_name="Lovelace")
    uow.users.items[user.id] = user
    return user
