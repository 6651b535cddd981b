#!/usr/bin/env python3
"""
Script to create a new organization and its admin user.

This script:
1. Creates the organization (its name is its identifier)
2. Creates the admin user (or reuses an existing one with the same email)
3. Grants the user the ADMIN role so they can review membership requests
4. Prints a short-lived access token for the admin

Usage:
  python scripts/create_organization.py --name acme --email admin@example.com
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from orgjoin.application.errors import AppError
from orgjoin.application.use_cases.organizations import bootstrap_organization
from orgjoin.config.settings import get_settings
from orgjoin.infrastructure.auth.jwt_service import JWTService
from orgjoin.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def create_organization(name: str, email: str, description: str | None) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            result = await bootstrap_organization.execute(
                uow=uow,
                payload=bootstrap_organization.BootstrapOrganizationInput(
                    organization_id=name,
                    admin_email=email,
                    description=description,
                ),
            )

        print("\n✅ Organization created successfully!")
        print(f"   Organization: {result.organization_id}")
        print(f"   Admin user ID: {result.admin_user_id}")
        print(f"   Admin email: {result.admin_email}")
        if not result.created_user:
            print("   (existing user promoted to ADMIN)")

        jwt_service = JWTService.from_settings(settings)
        token = jwt_service.create_access_token(subject=result.admin_user_id)
        print("\n🔑 Access token for the admin:")
        print(f"   {token}")
    except AppError as exc:
        print(f"\n❌ Error creating organization: {exc.message}")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Create a new organization with an admin user",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/create_organization.py --name acme --email admin@example.com
  python scripts/create_organization.py --name acme --email admin@example.com \\
      --description "Acme photo club"
        """,
    )
    parser.add_argument("--name", required=True, help="Unique organization name")
    parser.add_argument("--email", required=True, help="Email of the organization admin")
    parser.add_argument("--description", help="Optional organization description")

    args = parser.parse_args()

    print("=" * 60)
    print("🚀 Organization Creator")
    print("=" * 60)

    asyncio.run(create_organization(args.name, args.email, args.description))

    print("\n" + "=" * 60)
    print("✨ Process completed")
    print("=" * 60)
