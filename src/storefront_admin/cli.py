#!/usr/bin/env python3
"""
Command line entry point: server, migrations and admin bootstrap.
"""

import asyncio
import sys
from pathlib import Path

import click
import uvicorn

from storefront_admin import __version__
from storefront_admin.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="storefront-admin")
def cli() -> None:
    """Storefront admin CLI - run the API and manage admin accounts."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8090, type=int, help="Port to bind to (default: 8090)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the API server."""
    configure_logging(debug=(log_level == "debug"), level=log_level)
    logger.info("Starting storefront admin API server", host=host, port=port, reload=reload)

    try:
        uvicorn.run(
            "storefront_admin.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")


@cli.command()
@click.option(
    "--config",
    "config_path",
    default="alembic.ini",
    type=click.Path(dir_okay=False),
    help="Path to alembic.ini",
)
@click.option("--revision", default="head", help="Target revision (default: head)")
def migrate(config_path: str, revision: str) -> None:
    """Apply database migrations."""
    from alembic import command
    from alembic.config import Config

    configure_logging()

    if not Path(config_path).exists():
        click.echo(f"✗ Alembic config not found: {config_path}", err=True)
        sys.exit(1)

    command.upgrade(Config(config_path), revision)
    click.echo(f"✓ Database migrated to {revision}")


@cli.command("create-role")
@click.option("--name", required=True, help="Role name")
@click.option("--description", default=None, help="Role description")
@click.option(
    "--permission-type",
    default="all",
    type=click.Choice(["all", "custom"]),
    help="Grant every permission or a custom list",
)
@click.option("--permission", "permissions", multiple=True, help="Permission (repeatable)")
def create_role(
    name: str, description: str | None, permission_type: str, permissions: tuple[str, ...]
) -> None:
    """Create a role that admin users can be assigned to."""
    from storefront_admin.database.connection import get_async_session
    from storefront_admin.repositories import RoleRepository

    configure_logging()

    async def do_create() -> int:
        async with get_async_session() as session:
            role = await RoleRepository(session).create(
                {
                    "name": name,
                    "description": description,
                    "permission_type": permission_type,
                    "permissions": list(permissions),
                }
            )
            return role.id

    role_id = asyncio.run(do_create())
    logger.info("Role created", role_id=role_id, name=name)
    click.echo(f"✓ Role created: {role_id}")


@cli.command("create-admin")
@click.option("--name", required=True, help="Admin display name")
@click.option("--email", required=True, help="Login email")
@click.option("--role-id", required=True, type=int, help="Role to assign")
@click.password_option(help="Login password (prompted when omitted)")
@click.option("--inactive", is_flag=True, default=False, help="Create the account disabled")
def create_admin(name: str, email: str, role_id: int, password: str, inactive: bool) -> None:
    """Create an admin user (bootstraps the first account)."""
    from storefront_admin.database.connection import get_async_session
    from storefront_admin.errors import AdminError
    from storefront_admin.graphql.context import get_event_dispatcher
    from storefront_admin.repositories import AdminRepository, RoleRepository
    from storefront_admin.services.admin_users import AdminUserService
    from storefront_admin.storage import get_image_store

    configure_logging()

    async def do_create() -> int:
        async with get_async_session() as session:
            service = AdminUserService(
                AdminRepository(session),
                RoleRepository(session),
                get_event_dispatcher(),
                get_image_store(),
            )
            result = await service.create(
                {
                    "name": name,
                    "email": email,
                    "password": password,
                    "password_confirmation": password,
                    "role_id": role_id,
                    "status": not inactive,
                }
            )
            return result.admin.id

    try:
        admin_id = asyncio.run(do_create())
    except AdminError as e:
        click.echo(f"✗ Error creating admin: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Admin created: {admin_id}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
