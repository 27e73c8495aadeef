"""Rift Radio CLI - command registration and entry point."""

from rift_radio.cli.app import app
from rift_radio.cli.serve import serve
from rift_radio.cli.tracks import export_track, import_track, list_tracks

# Explicit command registration
app.command()(serve)
app.command(name="import")(import_track)
app.command(name="export")(export_track)
app.command(name="list")(list_tracks)


def main() -> None:
    """Entry point for the CLI."""
    app()
