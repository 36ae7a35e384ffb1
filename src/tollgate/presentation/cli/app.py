"""Tollgate CLI application using Typer.

Operator utilities: secret generation for deployment configuration and
user provisioning (the only way to create ADMIN or MODERATOR accounts,
since self-registration always yields USER).
"""

import asyncio
import secrets

import typer
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tollgate_auth import PasswordHasher, WeakPasswordError
from tollgate_config.settings import Settings, get_settings
from tollgate_identity.domain.user import (
    EmailAlreadyExistsError,
    PublicUser,
    UserRole,
    to_public_user,
)
from tollgate_identity.infrastructure.persistence.sqlalchemy import (
    CredentialStoreSQLAlchemy,
    IdentityBase,
)

app = typer.Typer(
    name="tollgate",
    help="Tollgate - credential-based session manager CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

users_app = typer.Typer(
    name="users",
    help="User provisioning",
    no_args_is_help=True,
)
app.add_typer(users_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Tollgate configuration.

    Generates three required secrets:
    - ACCESS_TOKEN_SECRET: Secret for signing access tokens
    - REFRESH_TOKEN_SECRET: Secret for signing refresh tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Tollgate Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy per signing secret for HS256
    access_secret = secrets.token_urlsafe(64)
    refresh_secret = secrets.token_urlsafe(64)
    while refresh_secret == access_secret:
        refresh_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]ACCESS_TOKEN_SECRET[/cyan]={access_secret}", soft_wrap=True)
    console.print(
        f"[cyan]REFRESH_TOKEN_SECRET[/cyan]={refresh_secret}",
        soft_wrap=True,
    )

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}", soft_wrap=True)

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


async def create_user(
    settings: Settings,
    email: str,
    password: str,
    role: UserRole,
    display_name: str | None = None,
) -> PublicUser:
    """Create a user directly in the configured database.

    Raises
    ------
    WeakPasswordError
        If the password does not meet strength requirements
    EmailAlreadyExistsError
        If the email is already registered
    """
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    password_hash = hasher.hash(password)

    engine = create_async_engine(settings.sqlalchemy_database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(IdentityBase.metadata.create_all)

        store = CredentialStoreSQLAlchemy(
            async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False),
        )
        user = await store.create(
            email=email,
            password_hash=password_hash,
            role=role,
            display_name=display_name,
        )
    finally:
        await engine.dispose()

    return to_public_user(user)


@users_app.command("create")
def create_user_command(
    email: str = typer.Argument(..., help="Email address of the new user"),
    role: UserRole = typer.Option(
        UserRole.USER,
        "--role",
        case_sensitive=False,
        help="Role to assign",
    ),
    display_name: str | None = typer.Option(None, "--name", help="Display name"),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password (prompted when omitted)",
    ),
) -> None:
    """Create a user with the given role."""
    try:
        user = asyncio.run(
            create_user(get_settings(), email, password, role, display_name),
        )
    except WeakPasswordError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1) from e
    except EmailAlreadyExistsError as e:
        console.print(f"[red]Error:[/red] {email} is already registered")
        raise typer.Exit(code=1) from e

    console.print(
        f"[green]Created user[/green] {user.email} "
        f"(id: {user.id}, role: {user.role.value})"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
