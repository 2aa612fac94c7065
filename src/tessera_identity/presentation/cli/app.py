"""Tessera CLI application using Typer.

Administrative commands for the identity store: schema management,
account inspection and lifecycle operations, linked identity management.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console
from rich.table import Table

from tessera_config import configure_logging, get_settings
from tessera_identity.application.factories import (
    IdentityServices,
    build_identity_services,
)
from tessera_identity.domain.account import Account, LinkedIdentity
from tessera_identity.domain.shared.exceptions import IdentityError
from tessera_identity.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyIdentityStore,
    create_engine_from_settings,
    create_tables,
    drop_tables,
)

T = TypeVar("T")

app = typer.Typer(
    name="tessera",
    help="Tessera - unified account identity CLI",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(name="db", help="Database schema management", no_args_is_help=True)
accounts_app = typer.Typer(name="accounts", help="Account operations", no_args_is_help=True)
links_app = typer.Typer(name="links", help="Linked identity operations", no_args_is_help=True)
app.add_typer(db_app)
app.add_typer(accounts_app)
app.add_typer(links_app)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _with_services(work: Callable[[IdentityServices], Awaitable[T]]) -> T:
    settings = get_settings()
    engine = create_engine_from_settings(settings)
    try:
        store = SQLAlchemyIdentityStore.from_engine(engine)
        return await work(build_identity_services(store, settings))
    finally:
        await engine.dispose()


def _run(work: Callable[[IdentityServices], Awaitable[T]]) -> T:
    configure_logging()
    try:
        return asyncio.run(_with_services(work))
    except IdentityError as e:
        console.print(f"[red]{e.code.value}[/red]: {e.message}")
        raise typer.Exit(1) from e


def _database_display() -> str:
    url = get_settings().database_url
    return url.split("@")[-1] if "@" in url else url


def _accounts_table(accounts: list[Account], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Email")
    table.add_column("Verified")
    table.add_column("Status")
    table.add_column("Created")
    for account in accounts:
        table.add_row(
            account.id,
            account.primary_email,
            "yes" if account.email_verified else "no",
            account.status.value,
            account.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def _links_table(links: list[LinkedIdentity], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Provider", style="cyan")
    table.add_column("Provider account")
    table.add_column("Status")
    table.add_column("Email")
    table.add_column("Linked")
    for linked in links:
        table.add_row(
            linked.provider.value,
            linked.provider_account_id,
            linked.status.value,
            linked.provider_email or "",
            linked.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


# ---------------------------------------------------------------------------
# db
# ---------------------------------------------------------------------------


async def _create_schema(drop_first: bool) -> None:
    engine = create_engine_from_settings(get_settings())
    try:
        if drop_first:
            await drop_tables(engine)
        await create_tables(engine)
    finally:
        await engine.dispose()


@db_app.command("init")
def db_init() -> None:
    """Create missing tables (idempotent)."""
    configure_logging()
    console.print(f"Database: [bold]{_database_display()}[/bold]")
    asyncio.run(_create_schema(drop_first=False))
    console.print("[green]Database initialized[/green]")


@db_app.command("reset")
def db_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Drop and recreate all tables (USE WITH CAUTION!)."""
    configure_logging()
    console.print(f"Database: [bold]{_database_display()}[/bold]")
    if not force:
        console.print("[yellow]WARNING: This will DELETE ALL DATA in the database![/yellow]")
        if not typer.confirm("Continue?", default=False):
            console.print("Aborted.")
            raise typer.Exit(1)
    asyncio.run(_create_schema(drop_first=True))
    console.print("[green]Database recreated[/green]")


# ---------------------------------------------------------------------------
# accounts
# ---------------------------------------------------------------------------


@accounts_app.command("create")
def accounts_create(email: str = typer.Argument(..., help="Primary email")) -> None:
    """Register a new account with an empty profile."""
    account = _run(lambda services: services.lifecycle.create_account(email))
    console.print(f"[green]Created account[/green] [cyan]{account.id}[/cyan]")


@accounts_app.command("show")
def accounts_show(account_id: str = typer.Argument(..., help="Account ID")) -> None:
    """Show an account with its linked identities."""

    async def work(services: IdentityServices) -> tuple[Account, list[LinkedIdentity]]:
        account = await services.queries.get_by_id(account_id)
        links = await services.linking.list_linked_identities(account_id)
        return account, links

    account, links = _run(work)
    console.print(_accounts_table([account], "Account"))
    if links:
        console.print(_links_table(links, "Linked identities"))
    else:
        console.print("[dim]No linked identities[/dim]")


@accounts_app.command("search")
def accounts_search(keyword: str = typer.Argument(..., help="Part of an email")) -> None:
    """Case-insensitive substring search over primary emails."""
    accounts = _run(lambda services: services.queries.search_by_email(keyword))
    if not accounts:
        console.print("[dim]No matching accounts[/dim]")
        return
    console.print(_accounts_table(accounts, f"Accounts matching '{keyword}'"))


@accounts_app.command("status")
def accounts_status(
    account_id: str = typer.Argument(..., help="Account ID"),
    new_status: str = typer.Argument(..., help="ACTIVE, INACTIVE, SUSPENDED or DELETED"),
) -> None:
    """Change the lifecycle status of an account."""
    account = _run(lambda services: services.lifecycle.change_status(account_id, new_status))
    console.print(f"Account [cyan]{account.id}[/cyan] is now [bold]{account.status.value}[/bold]")


@accounts_app.command("delete")
def accounts_delete(
    account_id: str = typer.Argument(..., help="Account ID"),
    purge: bool = typer.Option(
        False,
        "--purge",
        help="Remove the account, its profile and its links permanently",
    ),
) -> None:
    """Soft-delete an account, or purge it with --purge."""
    if purge:
        _run(lambda services: services.lifecycle.hard_delete(account_id))
        console.print(f"[red]Purged[/red] account [cyan]{account_id}[/cyan]")
        return
    _run(lambda services: services.lifecycle.soft_delete(account_id))
    console.print(f"Account [cyan]{account_id}[/cyan] marked DELETED")


# ---------------------------------------------------------------------------
# links
# ---------------------------------------------------------------------------


@links_app.command("list")
def links_list(
    account_id: str = typer.Argument(..., help="Account ID"),
    active_only: bool = typer.Option(False, "--active", help="Hide revoked links"),
) -> None:
    """List the linked identities of an account."""
    if active_only:
        links = _run(lambda services: services.linking.list_active_linked_identities(account_id))
    else:
        links = _run(lambda services: services.linking.list_linked_identities(account_id))
    if not links:
        console.print("[dim]No linked identities[/dim]")
        return
    console.print(_links_table(links, f"Linked identities of {account_id}"))


@links_app.command("unlink")
def links_unlink(
    account_id: str = typer.Argument(..., help="Account ID"),
    provider: str = typer.Argument(..., help="Provider name, e.g. GOOGLE"),
) -> None:
    """Revoke the account's link for a provider."""
    linked = _run(lambda services: services.linking.unlink(account_id, provider))
    console.print(
        f"Revoked {linked.provider.value} identity "
        f"[cyan]{linked.provider_account_id}[/cyan]",
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
