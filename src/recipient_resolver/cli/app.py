"""Typer CLI root application."""

import typer

from recipient_resolver.core.config import get_settings
from recipient_resolver.core.logging import setup_logging

app = typer.Typer(name="recipient-resolver", help="Payment recipient resolution and validation CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)


def _register_subcommands() -> None:
    """Register all CLI commands."""
    from recipient_resolver.cli.recipient_cmd import classify_cmd, search_cmd, validate_cmd

    app.command("classify")(classify_cmd)
    app.command("search")(search_cmd)
    app.command("validate")(validate_cmd)


_register_subcommands()
