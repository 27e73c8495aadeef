"""Typer app instance."""

import typer

app = typer.Typer(
    name="rift-radio",
    help="Rift Radio - Audio track catalog with durable file storage",
    no_args_is_help=True,
)
