"""CLI utilities."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

import typer
from pydantic import ValidationError

from rift_radio.api.app import open_services, setup_logging
from rift_radio.api.container import Services
from rift_radio.core.result import Ok, Result
from rift_radio.settings import Settings, get_settings

__all__ = [
    "echo_error",
    "echo_info",
    "echo_success",
    "load_settings",
    "open_catalog",
    "unwrap_or_exit",
]


def echo_error(message: str) -> NoReturn:
    """Print error message and exit."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def echo_success(message: str) -> None:
    """Print success message to stderr, keeping stdout free for data."""
    typer.echo(f"Success: {message}", err=True)


def echo_info(message: str) -> None:
    """Print info message."""
    typer.echo(message)


def load_settings() -> Settings:
    """Load settings from the environment, exit with error if invalid."""
    try:
        return get_settings()
    except ValidationError as e:
        echo_error(f"Configuration error: {e.errors()[0]['msg']}")


@contextmanager
def open_catalog() -> Iterator[Services]:
    """Open the configured catalog for the duration of a command."""
    settings = load_settings()
    setup_logging(settings)
    services = open_services(settings)
    try:
        yield services
    finally:
        services.close()


def unwrap_or_exit[T](result: Result[T]) -> T:
    """Return the success value, or print the error and exit."""
    if isinstance(result, Ok):
        return result.value
    echo_error(f"{result.message} ({result.error_code})")
