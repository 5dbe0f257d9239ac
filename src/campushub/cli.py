"""CLI entry point for CampusHub.

Admins and venues are provisioned here, out of band; there is no
self-service path to either.
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import replace

import click
import uvicorn

from campushub.config import ConfigError, Settings
from campushub.exceptions import CampusHubError
from campushub.identity import create_identity_store
from campushub.logging import setup_logging
from campushub.session import AccountCreator, StoreProfileRepository
from campushub.store import CampusStore, Profile, Role


def load_settings(db_path: str | None) -> Settings:
    """Settings from the environment, with ``--db`` taking precedence."""
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    if db_path is not None:
        settings = replace(settings, db_path=db_path)
    return settings


db_option = click.option(
    "--db",
    "db_path",
    type=str,
    default=None,
    help="SQLite database path (default: CAMPUSHUB_DB_PATH or campushub.db)",
)


@click.group()
@click.version_option(package_name="campushub")
def main() -> None:
    """CampusHub - campus event management."""
    pass


@main.command()
@db_option
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
def serve(db_path: str | None, host: str, port: int) -> None:
    """Run the HTTP API."""
    from campushub.api import create_app  # noqa: PLC0415

    settings = load_settings(db_path)
    setup_logging()
    click.echo(f"Serving CampusHub on http://{host}:{port} (db: {settings.db_path})")
    uvicorn.run(create_app(settings), host=host, port=port)


async def _create_admin(settings: Settings, email: str, password: str, name: str) -> Profile:
    store = CampusStore(settings.db_path)
    identity_store = create_identity_store(settings, store)
    try:
        creator = AccountCreator(identity_store, StoreProfileRepository(store))
        profile = await creator.create(email, password, Role.ADMIN, name)
        await identity_store.sign_out()
        return profile
    finally:
        await identity_store.aclose()
        store.close()


@main.command("create-admin")
@db_option
@click.option("--email", required=True, help="Admin email address")
@click.option("--name", required=True, help="Admin display name")
@click.password_option(help="Admin password")
def create_admin(db_path: str | None, email: str, name: str, password: str) -> None:
    """Provision an admin account."""
    settings = load_settings(db_path)
    try:
        profile = asyncio.run(_create_admin(settings, email, password, name))
    except CampusHubError as e:
        click.echo(f"Could not create admin: {e.message}", err=True)
        sys.exit(1)
    click.echo(f"Created admin {profile.name} ({profile.id})")


@main.command("add-venue")
@db_option
@click.option("--name", required=True, help="Venue name")
@click.option("--capacity", required=True, type=click.IntRange(min=0), help="Seats")
@click.option("--location", required=True, help="Where the venue is")
def add_venue(db_path: str | None, name: str, capacity: int, location: str) -> None:
    """Add a venue events can be held at."""
    settings = load_settings(db_path)
    store = CampusStore(settings.db_path)
    try:
        venue = store.create_venue(name=name, capacity=capacity, location=location)
    finally:
        store.close()
    click.echo(f"Added venue {venue.name} ({venue.id})")


@main.command("list-venues")
@db_option
def list_venues(db_path: str | None) -> None:
    """List venues."""
    settings = load_settings(db_path)
    store = CampusStore(settings.db_path)
    try:
        venues = store.list_venues()
    finally:
        store.close()

    if not venues:
        click.echo("No venues.")
        return
    for venue in venues:
        click.echo(f"{venue.id}  {venue.name}  capacity={venue.capacity}  {venue.location}")


if __name__ == "__main__":
    main()
