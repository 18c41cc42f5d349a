"""Main Typer application: registers the diagnostics commands.

Entry point: ``errorlogger`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from errorlogger.cli.commands.check import check_cmd
from errorlogger.cli.commands.sinks_cmd import sinks_cmd

app = typer.Typer(
    name="errorlogger",
    help="errorlogger: route application errors to mail, Slack, syslog and New Relic.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="sinks", help="List sink types and their settings keys.")(sinks_cmd)
app.command(name="check", help="Dry-run sink activation and show the report.")(check_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
