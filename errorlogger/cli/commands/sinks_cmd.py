"""``errorlogger sinks``: list known sink types and their settings keys."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from errorlogger.models.catalog import SINK_SPECS, SinkSpec

console = Console()


def _optional_fields(spec: SinkSpec) -> list[str]:
    rendered: list[str] = []
    for name, info in spec.parameters.model_fields.items():
        if name in spec.required:
            continue
        default = info.default
        if info.is_required() or default is None:
            rendered.append(spec.key(name))
        else:
            rendered.append(f"{spec.key(name)}={default!r}")
    rendered.append(f"{spec.key('level')}=100")
    return rendered


def sinks_cmd() -> None:
    """Show every sink type in activation order with its settings keys."""
    table = Table(title="Sink types (activation order)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Sink type", style="cyan")
    table.add_column("Required keys")
    table.add_column("Optional keys (defaults)")
    table.add_column("Debug-suppressible", justify="center")

    for position, spec in enumerate(SINK_SPECS.values(), start=1):
        required = [spec.key("enabled")] + [spec.key(name) for name in spec.required]
        suppressible = "[yellow]Yes[/yellow]" if spec.debug_suppressible else "[dim]No[/dim]"
        table.add_row(
            str(position),
            spec.sink_type.value,
            "\n".join(required),
            "\n".join(_optional_fields(spec)),
            suppressible,
        )

    console.print(table)
