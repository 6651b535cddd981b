from __future__ import annotations

import pytest

from orgjoin.application.errors import ConflictError, ValidationError
from orgjoin.application.use_cases.organizations import bootstrap_organization
from orgjoin.domain.value_objects.role import Role


async def test_bootstrap_creates_org_and_admin(uow):
    result = await bootstrap_organization.execute(
        uow=uow,
        payload=bootstrap_organization.BootstrapOrganizationInput(
            organization_id="  globex ", admin_email="Boss@Globex.com"
        ),
    )

    assert result.organization_id == "globex"
    assert result.admin_email == "boss@globex.com"
    assert result.created_user is True
    assert await uow.organizations.exists("globex")
    assert await uow.memberships.get_role(result.admin_user_id, "globex") is Role.ADMIN
    assert uow.commits == 1


async def test_bootstrap_reuses_existing_user(uow, applicant):
    result = await bootstrap_organization.execute(
        uow=uow,
        payload=bootstrap_organization.BootstrapOrganizationInput(
            organization_id="globex", admin_email="applicant@example.com"
        ),
    )

    assert result.admin_user_id == applicant.id
    assert result.created_user is False


async def test_bootstrap_existing_org_conflicts(uow):
    with pytest.raises(ConflictError):
        await bootstrap_organization.execute(
            uow=uow,
            payload=bootstrap_organization.BootstrapOrganizationInput(
                organization_id="acme", admin_email="boss@acme.com"
            ),
        )


async def test_bootstrap_requires_name(uow):
    with pytest.raises(ValidationError):
        await bootstrap_organization.execute(
            uow=uow,
            payload=bootstrap_organization.BootstrapOrganizationInput(
                organization_id="   ", admin_email="boss@acme.com"
            ),
        )
