"""Command-line interface for the user management service.

Provides commands to create the database tables and to register, update
and inspect accounts against the configured database.
"""

import asyncio
import json
from dataclasses import asdict
from datetime import date
from typing import Any, Awaitable, Callable, NoReturn

import click
from pydantic import ValidationError

from usermanagement import __version__
from usermanagement.core.config import get_settings
from usermanagement.core.logging import configure_logging, get_logger
from usermanagement.core.outcome import Outcome


def _run_with_service(
    operation: Callable[[Any], Awaitable[Outcome]],
) -> Outcome:
    """Run ``operation`` with an account service bound to a database session."""
    from usermanagement.application.services import create_account_service
    from usermanagement.infrastructure.persistence.database import DatabaseManager
    from usermanagement.infrastructure.persistence.repositories import SqlAccountRepository

    settings = get_settings()

    async def run() -> Outcome:
        db = DatabaseManager(settings)
        try:
            async with db.session() as session:
                service = create_account_service(SqlAccountRepository(session), settings)
                return await operation(service)
        finally:
            await db.disconnect()

    return asyncio.run(run())


def _echo_outcome(outcome: Outcome) -> None:
    """Print an outcome as JSON and exit non-zero on failure."""
    if outcome.is_success:
        click.echo(json.dumps(asdict(outcome.value), default=str, indent=2))
        return
    click.echo(
        json.dumps(
            {"code": outcome.code, "message": outcome.message, "errors": list(outcome.errors)},
            indent=2,
        ),
        err=True,
    )
    raise SystemExit(1)


def _echo_validation_error(error: ValidationError) -> NoReturn:
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "request"
        click.echo(f"{location}: {detail['msg']}", err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(version=__version__, prog_name="usermanagement")
def cli() -> None:
    """User account registration and profile management."""
    configure_logging(get_settings())


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Create the accounts table and its unique indexes."""
    from usermanagement.infrastructure.persistence.database import DatabaseManager

    settings = get_settings()
    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            await db.init_database()
            click.echo("Database initialized successfully.")
        except RuntimeError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option("--email", type=str, required=True, help="Email address")
@click.option(
    "--password",
    type=str,
    default=None,
    help="Password (prompts if not provided)",
)
@click.option("--first-name", type=str, required=True, help="First name")
@click.option("--last-name", type=str, required=True, help="Last name")
@click.option("--display-name", type=str, default=None, help="Display name")
@click.option("--phone", "phone_number", type=str, default=None, help="Phone number")
@click.option(
    "--date-of-birth",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date of birth (YYYY-MM-DD)",
)
def register(
    email: str,
    password: str | None,
    first_name: str,
    last_name: str,
    display_name: str | None,
    phone_number: str | None,
    date_of_birth: Any,
) -> None:
    """Register a new account."""
    from usermanagement.application.schemas import RegisterAccountSchema

    logger = get_logger(__name__)

    if password is None:
        password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

    try:
        schema = RegisterAccountSchema(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            display_name=display_name,
            phone_number=phone_number,
            date_of_birth=date_of_birth.date() if date_of_birth else None,
        )
    except ValidationError as e:
        _echo_validation_error(e)

    logger.info("Registering account from CLI", email=schema.email)
    _echo_outcome(_run_with_service(lambda service: service.register_account(schema.to_request())))


@cli.command()
@click.argument("account_id")
@click.option("--first-name", type=str, required=True, help="First name")
@click.option("--last-name", type=str, required=True, help="Last name")
@click.option("--display-name", type=str, default=None, help="Display name")
@click.option("--phone", "phone_number", type=str, default=None, help="Phone number")
@click.option(
    "--date-of-birth",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date of birth (YYYY-MM-DD)",
)
def update(
    account_id: str,
    first_name: str,
    last_name: str,
    display_name: str | None,
    phone_number: str | None,
    date_of_birth: Any,
) -> None:
    """Update the profile of an existing account."""
    from usermanagement.application.schemas import UpdateAccountSchema

    birth_date: date | None = date_of_birth.date() if date_of_birth else None
    try:
        schema = UpdateAccountSchema(
            account_id=account_id,
            first_name=first_name,
            last_name=last_name,
            display_name=display_name,
            phone_number=phone_number,
            date_of_birth=birth_date,
        )
    except ValidationError as e:
        _echo_validation_error(e)

    _echo_outcome(_run_with_service(lambda service: service.update_account(schema.to_request())))


@cli.command()
@click.argument("account_id")
def show(account_id: str) -> None:
    """Show a single account."""
    _echo_outcome(_run_with_service(lambda service: service.get_account(account_id)))


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
