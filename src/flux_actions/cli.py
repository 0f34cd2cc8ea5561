from __future__ import annotations

import json

import typer

from flux_actions.config import FluxSettings
from flux_actions.main import main

app = typer.Typer(no_args_is_help=True)


@app.command()
def demo(
    value: int = typer.Option(None, "--value", help="Value to trigger the sample action with"),
) -> None:
    """
    Build `root.save`, subscribe, trigger it twice (unsubscribing in between) and check
    the subscriber ran exactly once.
    """
    raise SystemExit(main(value))


@app.command("show-config")
def show_config() -> None:
    """Print the effective settings as JSON."""
    settings = FluxSettings()
    typer.echo(json.dumps(settings.model_dump(), indent=2, sort_keys=True))
