from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from orgjoin.application.use_cases.organizations import bootstrap_organization
from orgjoin.config.settings import Settings
from orgjoin.domain.models.user import User
from orgjoin.infrastructure.db.base import Base
from orgjoin.infrastructure.db.orm import (  # noqa: F401
    membership,
    membership_request,
    organization,
    user,
)
from orgjoin.infrastructure.db.session import SQLAlchemyUnitOfWork
from orgjoin.infrastructure.email.models import EmailMessage, EmailService
from orgjoin.interfaces.http.main import create_app


class RecordingEmailService(EmailService):
    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.sent.append(message)


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "jwt_secret_key": "test-secret-key",
            "log_level": "INFO",
            "product_name": "PhotoComp",
        }
    )


@pytest.fixture()
def email_service() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture()
def app(test_settings: Settings, email_service: RecordingEmailService):
    return create_app(settings=test_settings, email_service=email_service)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    await engine.dispose()


@pytest.fixture()
async def seeded_users(app, client) -> dict[str, UUID]:
    """Organization `acme` with an admin plus two applicants, `u1` and `u2`."""
    uow = SQLAlchemyUnitOfWork(app.state.session_factory)
    async with uow:
        result = await bootstrap_organization.execute(
            uow=uow,
            payload=bootstrap_organization.BootstrapOrganizationInput(
                organization_id="acme",
                admin_email="admin@example.com",
                first_name="Grace",
                last_name="Hopper",
            ),
        )
    uow = SQLAlchemyUnitOfWork(app.state.session_factory)
    async with uow:
        u1 = await uow.users.add(User.create("u1@example.com", first_name="Ada", last_name="One"))
        u2 = await uow.users.add(User.create("u2@example.com", first_name="Bob", last_name="Two"))
        await uow.commit()
    return {"admin": result.admin_user_id, "u1": u1.id, "u2": u2.id}


@pytest.fixture()
def auth_headers(app) -> Callable[[UUID], dict[str, str]]:
    def make(user_id: UUID) -> dict[str, str]:
        token = app.state.jwt_service.create_access_token(subject=user_id)
        return {"Authorization": f"Bearer {token}"}

    return make
