"""Terminal rendering of reconciled connection rows."""

from typing import List, Optional

from tabulate import tabulate

from .core.connections import STATUS_CONNECTED, STATUS_DISCONNECTED, ReconciledRow
from .daemon.platform import use_color
from .errors import UsageError

# Colors
GREEN = "\x1b[32;1m"
RED = "\x1b[31;1m"
NC = "\x1b[0m"

OUTPUT_FORMATS = ("table", "tsv")

HEADERS = ["ID", "Name", "Status"]
EXTENDED_HEADERS = HEADERS + ["Connected for", "Client IP", "Server IP"]


def colorize_status(status: str) -> str:
    if status == STATUS_CONNECTED:
        return f"{GREEN}{status}{NC}"
    if status == STATUS_DISCONNECTED:
        return f"{RED}{status}{NC}"
    return status


def _cells(row: ReconciledRow, extended: bool, color: bool) -> list:
    status = colorize_status(row.status) if color else row.status
    cells = [str(row.id), row.name, status]
    if extended:
        since = row.connected_for
        if since and row.clock_skew:
            since += " (clock skew)"
        cells += [since, row.client_addr, row.server_addr]
    return cells


def check_format(output_format: str):
    """Raise UsageError for an unknown output format."""
    if output_format not in OUTPUT_FORMATS:
        raise UsageError(
            f"Unknown output format '{output_format}' (expected one of: {', '.join(OUTPUT_FORMATS)})"
        )


def render(
        rows: List[ReconciledRow],
        extended: bool,
        output_format: str = "table",
        color: Optional[bool] = None,
) -> str:
    """Render rows as a bordered table or as tab-separated values.

    Args:
        rows: Reconciled rows, already sorted
        extended: Include the connected-for and address columns
        output_format: 'table' or 'tsv'
        color: Colorize status in tables (defaults to on except on Windows)

    Returns:
        Rendered text without a trailing newline

    Raises:
        UsageError: If output_format is unknown
    """
    check_format(output_format)
    headers = EXTENDED_HEADERS if extended else HEADERS

    if output_format == "tsv":
        lines = [headers] + [_cells(row, extended, False) for row in rows]
        return "\n".join("\t".join(cells) for cells in lines)

    if color is None:
        color = use_color()
    table = [_cells(row, extended, color) for row in rows]
    return tabulate(table, headers=headers, tablefmt="grid", disable_numparse=True)
