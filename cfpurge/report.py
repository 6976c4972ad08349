from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .zone import Zone, ZoneError

TITLE = "The following zones have been purged from CloudFlare."
HEADERS = ("Status", "Zone", "Files", "Tags", "Hosts", "Errors")


@dataclass(slots=True)
class ReportRow:
    success: bool
    identifier: str
    files: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    hosts: list[str] = field(default_factory=list)
    errors: list[ZoneError] = field(default_factory=list)


def build_rows(batch: Mapping[str, Zone], results: Mapping[str, Zone]) -> list[ReportRow]:
    """Joins requested parameters with purge results, in batch order."""
    rows = []
    for identifier, zone in batch.items():
        result = results[identifier]
        rows.append(
            ReportRow(
                success=bool(result.success),
                identifier=identifier,
                files=zone.get("files", []),
                tags=zone.get("tags", []),
                hosts=zone.get("hosts", []),
                errors=result.get("errors", []),
            )
        )
    return rows


def format_error(error: ZoneError) -> str:
    if error.code is not None:
        return f"{error.code}: {error.message}"
    return error.message


def _multiline(items: Iterable[str], style: str = "") -> Text:
    return Text("\n".join(items), style=style)


def render_results(rows: Iterable[ReportRow], console: Console | None = None) -> None:
    console = console or Console()

    table = Table(title=TITLE, show_lines=True)
    for header in HEADERS:
        table.add_column(header)

    for row in rows:
        table.add_row(
            "✅" if row.success else "❌",
            Text(row.identifier),
            _multiline(row.files),
            _multiline(row.tags),
            _multiline(row.hosts),
            _multiline((format_error(error) for error in row.errors), style="red"),
        )

    console.print(table)
