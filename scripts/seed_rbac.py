"""Seed RBAC (permission catalog + super_admin role) for a tenant.

Usage:
    python -m scripts.seed_rbac <tenant_id> [resource_type ...] [--admin <user_id>]

Resource types default to 'user' and 'role'. With --admin, the given user
is assigned the super admin role. Requires DATABASE_URL (Postgres).
"""

import argparse
import asyncio
import sys

from panel_policy.application.services.permission_catalog import PermissionCatalog
from panel_policy.core.config import get_settings
from panel_policy.domain.exceptions import SqlNotConfiguredException
from panel_policy.infrastructure.persistence import database
from panel_policy.infrastructure.services import (
    PermissionResolver,
    RbacInitializationService,
)
from panel_policy.shared.logging import setup_logging

DEFAULT_RESOURCE_TYPES = ["user", "role"]


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed RBAC for a tenant.")
    parser.add_argument("tenant_id")
    parser.add_argument("resource_types", nargs="*", default=DEFAULT_RESOURCE_TYPES)
    parser.add_argument("--admin", dest="admin_user_id", default=None)
    return parser.parse_args(argv)


async def main(argv: list[str]) -> None:
    """Seed RBAC for the given tenant."""
    args = _parse_args(argv)
    settings = get_settings()
    setup_logging()
    catalog = PermissionCatalog(
        resource_types=args.resource_types,
        super_admin_role=settings.super_admin_role,
    )
    try:
        async with database.get_db_transactional() as session:
            svc = RbacInitializationService(session, catalog)
            await svc.initialize_tenant(args.tenant_id)
            if args.admin_user_id:
                await svc.assign_role(
                    args.tenant_id, args.admin_user_id, settings.super_admin_role
                )
                roles = await PermissionResolver(session).get_user_role_codes(
                    args.admin_user_id, args.tenant_id
                )
                print(f"{args.admin_user_id} roles: {', '.join(sorted(roles))}")
    except SqlNotConfiguredException as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()
    print(
        f"Seeded RBAC for tenant {args.tenant_id} "
        f"({len(catalog.permissions())} permissions)"
    )


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
