from __future__ import annotations

from typing import Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from user_records.domain.models import Record


def sorted_for_display(records: Iterable[Record]) -> List[Record]:
    """
    Order records by id for rendering.

    The store does not guarantee row order, so the view imposes one.
    """
    return sorted(records, key=lambda r: (r.id is None, r.id or 0))


def build_records_table(records: Iterable[Record], highlight_id: Optional[int] = None) -> Table:
    """
    Build a rich Table listing records keyed by id.

    Parameters
    ----------
    records : Iterable[Record]
        Snapshot returned by `fetch_all()`.
    highlight_id : int | None
        Id of the row just added or edited; rendered in bold.
    """
    table = Table(title="Users", box=box.ROUNDED, show_lines=False)
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Age", justify="right")
    table.add_column("Email", style="dim")

    for record in sorted_for_display(records):
        style = "bold blue" if highlight_id is not None and record.id == highlight_id else None
        table.add_row(str(record.id), record.name, str(record.age), record.email, style=style)
    return table


def render_records(
    records: Iterable[Record],
    highlight_id: Optional[int] = None,
    console: Optional[Console] = None,
) -> None:
    """Print the records table, or a hint when the store is empty."""
    console = console or Console()
    records = list(records)
    if not records:
        console.print("No users stored yet.")
        return
    console.print(build_records_table(records, highlight_id=highlight_id))


__all__ = ["build_records_table", "render_records", "sorted_for_display"]
