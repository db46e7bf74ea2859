"""userhub CLI application using Typer.

Operator commands for the account lifecycle: schema bootstrap and
user administration against the configured database.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Optional, TypeVar

import pydantic
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.application.dtos import UserDTO, UserUpdate
from userhub.application.services import UserLifecycleService
from userhub.domain.shared.exceptions import DomainException
from userhub.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
)
from userhub.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from userhub.infrastructure.persistence.sqlalchemy.session import (
    create_engine,
    create_session_maker,
)
from userhub.services import PasswordHashingService
from userhub_config import Settings, configure_logging, get_settings

T = TypeVar("T")

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="userhub",
    help="userhub - user account lifecycle administration",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(
    name="db",
    help="Database schema management",
    no_args_is_help=True,
)
app.add_typer(db_app)

users_app = typer.Typer(
    name="users",
    help="Create, inspect and manage user accounts",
    no_args_is_help=True,
)
app.add_typer(users_app)


def _load_settings() -> Settings:
    try:
        settings = get_settings()
    except pydantic.ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    configure_logging(settings)
    return settings


@asynccontextmanager
async def _lifecycle_session(
    settings: Settings,
) -> AsyncIterator[tuple[UserLifecycleService, AsyncSession]]:
    engine = create_engine(settings)
    try:
        async with create_session_maker(engine)() as session:
            service = UserLifecycleService(
                user_repository=UserRepositorySQLAlchemy(session),
                password_service=PasswordHashingService(
                    rounds=settings.password_hash_rounds,
                    min_length=settings.password_min_length,
                ),
            )
            yield service, session
    finally:
        await engine.dispose()


def _run(operation: Callable[[UserLifecycleService], Awaitable[T]]) -> T:
    """Run one lifecycle operation in its own transaction.

    Commits on success. Domain errors roll back, are printed and end the
    command with exit code 1.
    """
    settings = _load_settings()

    async def _execute() -> T:
        async with _lifecycle_session(settings) as (service, session):
            try:
                result = await operation(service)
            except DomainException:
                await session.rollback()
                raise
            await session.commit()
            return result

    try:
        return asyncio.run(_execute())
    except DomainException as e:
        logger.debug("Command failed: %r", e)
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(code=1) from e


def _print_user(user: UserDTO) -> None:
    console.print(f"[bold]ID:[/bold]      {user.id}")
    console.print(f"[bold]Email:[/bold]   {escape(user.email)}")
    console.print(f"[bold]Role:[/bold]    {user.role}")
    console.print(f"[bold]Created:[/bold] {user.created_at:%Y-%m-%d %H:%M:%S}")
    console.print(f"[bold]Updated:[/bold] {user.updated_at:%Y-%m-%d %H:%M:%S}")


# -----------------------------------------------------------------------------
# db
# -----------------------------------------------------------------------------


@db_app.command("init")
def db_init() -> None:
    """Create all database tables (idempotent)."""
    settings = _load_settings()

    async def _init() -> None:
        engine = create_engine(settings)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    console.print("[green]Database initialized[/green]")


@db_app.command("drop")
def db_drop(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """Drop all database tables (deletes all data)."""
    settings = _load_settings()
    if not force:
        typer.confirm("This will DELETE ALL DATA in the database. Continue?", abort=True)

    async def _drop() -> None:
        engine = create_engine(settings)
        try:
            await drop_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_drop())
    console.print("[yellow]Database tables dropped[/yellow]")


# -----------------------------------------------------------------------------
# users
# -----------------------------------------------------------------------------


@users_app.command("create")
def users_create(
    email: str = typer.Argument(..., help="Email address of the new user"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Initial password",
    ),
    role: Optional[str] = typer.Option(None, "--role", "-r", help="user or admin"),
) -> None:
    """Create a new user."""
    user = _run(lambda service: service.create(email, password, role))
    console.print(
        f"[green]Created user {user.id}[/green] ({escape(user.email)}, role {user.role})"
    )


@users_app.command("list")
def users_list() -> None:
    """List active users."""
    users = _run(lambda service: service.list())

    if not users:
        console.print("[dim]No users found[/dim]")
        return

    table = Table(title="Users")
    table.add_column("ID", justify="right")
    table.add_column("Email")
    table.add_column("Role")
    table.add_column("Created")
    for user in users:
        table.add_row(
            str(user.id),
            user.email,
            user.role,
            f"{user.created_at:%Y-%m-%d %H:%M}",
        )
    console.print(table)


@users_app.command("show")
def users_show(user_id: int = typer.Argument(..., help="User ID")) -> None:
    """Show a single active user."""
    user = _run(lambda service: service.get(user_id))
    _print_user(user)


@users_app.command("update")
def users_update(
    user_id: int = typer.Argument(..., help="User ID"),
    email: Optional[str] = typer.Option(None, "--email", "-e", help="New email"),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        "-p",
        help="New password",
    ),
    role: Optional[str] = typer.Option(None, "--role", "-r", help="user or admin"),
) -> None:
    """Update email, password and/or role of a user."""
    changes = UserUpdate(email=email, password=password, role=role)
    if changes.is_empty():
        console.print(
            "[red]Error:[/red] Nothing to update; pass --email, --password or --role"
        )
        raise typer.Exit(code=1)
    user = _run(lambda service: service.update(user_id, changes))
    console.print(f"[green]Updated user {user.id}[/green]")
    _print_user(user)


@users_app.command("delete")
def users_delete(
    user_id: int = typer.Argument(..., help="User ID"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """Permanently delete a user."""
    if not force:
        typer.confirm(f"Permanently delete user {user_id}?", abort=True)
    _run(lambda service: service.remove(user_id))
    console.print(f"[green]Deleted user {user_id}[/green]")


@users_app.command("soft-delete")
def users_soft_delete(user_id: int = typer.Argument(..., help="User ID")) -> None:
    """Soft delete a user (restorable)."""
    message = _run(lambda service: service.soft_delete(user_id))
    console.print(f"[green]{escape(message)}[/green]")


@users_app.command("restore")
def users_restore(user_id: int = typer.Argument(..., help="User ID")) -> None:
    """Restore a soft-deleted user."""
    user = _run(lambda service: service.restore(user_id))
    console.print(f"[green]Restored user {user.id}[/green] ({escape(user.email)})")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
