"""``errorlogger check``: dry-run an activation pass and print the report.

Loads the sink settings, activates them against a throwaway logger and
shows which sinks would be attached.  With ``--emit-test`` one ERROR
record is sent through the attached sinks before they are closed.
"""

from __future__ import annotations

import logging
import smtplib
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from errorlogger.config import ErrorLoggerSettings
from errorlogger.exceptions import ConfigSourceError
from errorlogger.models.sinks import ActivationReport, SkipReason
from errorlogger.routing import (
    ConfigSource,
    EnvConfigSource,
    LoggerPipeline,
    MappingConfigSource,
    SinkRouter,
    load_sink_configs,
)

console = Console()

_REASON_STYLES: dict[SkipReason, str] = {
    SkipReason.DISABLED: "dim",
    SkipReason.MISSING_FIELDS: "yellow",
    SkipReason.DEBUG_SUPPRESSED: "blue",
    SkipReason.CONSTRUCTION_FAILURE: "red",
}


def _report_table(report: ActivationReport) -> Table:
    table = Table(title="Sink activation")
    table.add_column("Sink type", style="cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Detail")

    for sink_type in report.attached:
        table.add_row(sink_type.value, "[green]attached[/green]", "")
    for sink_type, outcome in report.skipped.items():
        style = _REASON_STYLES[outcome.reason]
        table.add_row(sink_type.value, f"[{style}]{outcome.reason.value}[/{style}]", outcome.detail)
    return table


def check_cmd(
    settings_file: Path = typer.Option(
        None,
        "--settings",
        "-s",
        help="JSON or TOML file holding the sink settings.",
    ),
    from_env: bool = typer.Option(
        False,
        "--env",
        help="Read sink settings from ERRORLOGGER_* environment variables.",
    ),
    debug: bool = typer.Option(
        None,
        "--debug/--no-debug",
        help="Host debug flag; defaults to ERRORLOGGER_APP_DEBUG.",
    ),
    smtp_host: str = typer.Option(
        None,
        "--smtp-host",
        help="SMTP server used as the host mailer for the host_mail sink.",
    ),
    emit_test: bool = typer.Option(
        False,
        "--emit-test",
        help="Send one ERROR record through the attached sinks.",
    ),
) -> None:
    """Activate the configured sinks against a throwaway logger."""
    settings = ErrorLoggerSettings()
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

    source: ConfigSource
    settings_file = settings_file or settings.settings_file
    if settings_file is not None:
        try:
            source = MappingConfigSource.from_file(settings_file)
        except ConfigSourceError as exc:
            console.print(f"[red]Settings error:[/red] {exc}")
            raise typer.Exit(code=2)
    elif from_env:
        source = EnvConfigSource()
    else:
        console.print("[red]No settings given.[/red] Use --settings FILE or --env.")
        raise typer.Exit(code=2)

    opened_mailers: list[smtplib.SMTP] = []

    def _open_mailer() -> smtplib.SMTP:
        smtp = smtplib.SMTP(smtp_host)
        opened_mailers.append(smtp)
        return smtp

    router = SinkRouter(settings=settings, mailer_provider=_open_mailer if smtp_host else None)

    target = logging.getLogger("errorlogger.check")
    target.propagate = False
    target.setLevel(logging.DEBUG)
    pipeline = LoggerPipeline(target)
    try:
        report = router.activate(load_sink_configs(source), pipeline, global_debug=debug)
        console.print(_report_table(report))

        if emit_test and report.attached:
            target.error("errorlogger test record from %s", settings.app_url)
            console.print(f"[dim]Test record sent to {len(report.attached)} sink(s).[/dim]")
    finally:
        pipeline.close()
        for smtp in opened_mailers:
            try:
                smtp.quit()
            except (smtplib.SMTPException, OSError):
                smtp.close()

    if report.failures:
        raise typer.Exit(code=1)
