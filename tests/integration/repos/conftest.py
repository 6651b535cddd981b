from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from orgjoin.infrastructure.db.base import Base
from orgjoin.infrastructure.db.orm import (  # noqa: F401
    membership,
    membership_request,
    organization,
    user,
)
from orgjoin.infrastructure.db.session import create_engine, create_session_factory


@pytest.fixture()
async def session_factory(tmp_path) -> AsyncIterator:
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'repos.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()
