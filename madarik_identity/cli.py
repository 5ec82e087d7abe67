"""Madarik identity operator CLI using Typer.

Bootstraps the first admin account and runs housekeeping jobs against
the configured database.
"""

import asyncio

import typer
from rich.console import Console
from sqlmodel import SQLModel

from madarik_identity.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from madarik_identity.app.services.clock import SystemClock
from madarik_identity.app.services.validation import validate_email_address, validate_password
from madarik_identity.app.use_cases.invitations import ExpireInvitationsUseCase
from madarik_identity.depends import AsyncSessionLocal, engine, password_hasher, settings
from madarik_identity.domain.base import utcnow
from madarik_identity.domain.entities import AuditEvent, User, UserRole

app = typer.Typer(
    name="madarik-identity",
    help="Madarik identity service operator commands",
    no_args_is_help=True,
)
console = Console()


async def _create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def _create_admin(email: str, password: str) -> bool:
    await _create_tables()

    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            # Only the very first account may be created outside an invitation
            if await uow.users.count() > 0:
                return False

            admin = User(
                email=email,
                password_hash=password_hasher.hash(password),
                role=UserRole.ADMIN,
                email_verified_at=utcnow(),
            )
            admin = await uow.users.create(admin)

            await uow.audit_events.create(
                AuditEvent(
                    user_id=admin.id,
                    action="admin_bootstrapped",
                    event_metadata={"email": email},
                )
            )
            await uow.commit()

    return True


async def _expire_invitations() -> int:
    async with AsyncSessionLocal() as session:
        result = await ExpireInvitationsUseCase(
            SqlAlchemyUnitOfWork(session), SystemClock()
        ).execute()
    return result.value.expired_count


@app.command("create-admin")
def create_admin(
    email: str = typer.Option(..., "--email", help="Email of the first admin"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, confirmation_prompt=True
    ),
) -> None:
    """Create the tables and the first ADMIN account.

    Refused once any account exists; everyone else joins by invitation.
    """
    email_result = validate_email_address(email)
    if email_result.is_err():
        console.print(f"[red]{email_result.error.message}[/red]")
        raise typer.Exit(code=1)

    password_result = validate_password(password, settings.password_min_length)
    if password_result.is_err():
        console.print(f"[red]{password_result.error.message}[/red]")
        raise typer.Exit(code=1)

    created = asyncio.run(_create_admin(email_result.value, password))
    if not created:
        console.print("[yellow]Accounts already exist; invite new users instead.[/yellow]")
        raise typer.Exit(code=1)

    console.print(f"[green]Admin {email_result.value} created.[/green]")


@app.command("expire-invitations")
def expire_invitations() -> None:
    """Mark every overdue PENDING invitation as EXPIRED."""
    count = asyncio.run(_expire_invitations())
    console.print(f"Expired {count} invitation(s).")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
