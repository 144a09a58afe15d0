"""Lemmy settings CLI.

Operator helpers for checking a config file before deploying it and
inspecting the values the server will derive from it.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final

import typer
from dotenv import load_dotenv

from lemmy_settings.errors import SettingsError
from lemmy_settings.settings.loader import get_config_location, load_settings
from lemmy_settings.settings.models import Settings
from lemmy_settings.store import SettingsStore

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Lemmy settings CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "lemmy_settings.cli"

CONFIG_OPTION = typer.Option(
    None, "--config", "-c", dir_okay=False, help="Config file (default: LEMMY_CONFIG_LOCATION)"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
REVEAL_OPTION = typer.Option(False, "--reveal", help="Show the database password")
FILE_ARGUMENT = typer.Argument(None, dir_okay=False, help="Config file to check")
TEXT_ARGUMENT = typer.Argument(..., help="Text to run through the slur filter")

MASK: Final = "****"


@app.callback()
def main(debug: bool = DEBUG_OPTION) -> None:
    """Configure logging and pick up a local .env file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    load_dotenv()


def _fail(exc: SettingsError) -> typer.Exit:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def _load(config: Path | None) -> Settings:
    try:
        return SettingsStore(config).init()
    except SettingsError as exc:
        raise _fail(exc) from exc


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("location")
def location() -> None:
    """Print the config file path that would be loaded."""
    typer.echo(str(get_config_location()))


@config_app.command("validate")
def validate_config(file: Path | None = FILE_ARGUMENT) -> None:
    """Validate a config file against the schema."""
    path = file or get_config_location()
    try:
        settings = load_settings(path)
        settings.slur_regex()
    except SettingsError as exc:
        raise _fail(exc) from exc
    typer.echo(f"✅ Config valid ({settings.hostname})")


@config_app.command("show")
def show(config: Path | None = CONFIG_OPTION, reveal: bool = REVEAL_OPTION) -> None:
    """Print the values derived from the config file."""
    settings = _load(config)

    database_url = settings.get_database_url()
    if not reveal and settings.database.password:
        database_url = database_url.replace(f":{settings.database.password}@", f":{MASK}@", 1)

    try:
        host = settings.get_hostname_without_port()
    except SettingsError as exc:
        raise _fail(exc) from exc

    typer.echo(f"hostname:      {settings.hostname}")
    typer.echo(f"host:          {host}")
    typer.echo(f"public url:    {settings.get_protocol_and_hostname()}")
    typer.echo(f"database url:  {database_url}")
    typer.echo(f"federation:    {'enabled' if settings.federation.enabled else 'disabled'}")


@config_app.command("check-slur")
def check_slur(text: str = TEXT_ARGUMENT, config: Path | None = CONFIG_OPTION) -> None:
    """Exit with status 1 if TEXT is caught by the slur filter."""
    settings = _load(config)
    try:
        regex = settings.slur_regex()
    except SettingsError as exc:
        raise _fail(exc) from exc

    match = regex.search(text)
    if match:
        logger.debug("slur filter matched %r", match.group(0))
        typer.secho("Rejected by slur filter", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo("OK")


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
