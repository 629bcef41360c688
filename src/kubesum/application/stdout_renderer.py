"""Render scan results to stdout using rich."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from kubesum.application.scan_service import ScanResult
from kubesum.domain.resource_totals import ResourceTotals


def _format_cpu(cores: float) -> str:
    return f"{cores:.3f}"


def _build_totals_table(totals: ResourceTotals) -> Table:
    table = Table(title="Total resources", box=box.SIMPLE_HEAVY)
    table.add_column("resource", justify="left")
    table.add_column("requested", justify="right")
    table.add_column("limit", justify="right")
    table.add_row("memory", str(totals.memory_requested), str(totals.memory_limit))
    table.add_row(
        "cpu", _format_cpu(totals.cpu_requested), _format_cpu(totals.cpu_limit)
    )
    return table


def _build_documents_table(result: ScanResult) -> Table:
    table = Table(title="Per document", box=box.SIMPLE_HEAVY, expand=True)
    table.add_column("document", overflow="fold", justify="left")
    for header in ("memory_req", "memory_lim", "cpu_req", "cpu_lim"):
        table.add_column(header, justify="right")
    for document in result.documents:
        path = document.path
        if path.is_relative_to(result.root):
            path = path.relative_to(result.root)
        totals = document.totals
        table.add_row(
            str(path),
            str(totals.memory_requested),
            str(totals.memory_limit),
            _format_cpu(totals.cpu_requested),
            _format_cpu(totals.cpu_limit),
        )
    return table


def render_scan_report(
    result: ScanResult,
    *,
    captured_stdout: str = "",
    per_file: bool = False,
    console: Console | None = None,
) -> None:
    """Render execution log, optional per-document table and grand totals."""
    console = console or Console()
    console.print(
        f"[bold cyan]Analyzing kubernetes configs in {result.root}[/bold cyan]"
    )

    if captured_stdout.strip():
        console.print(
            Panel(captured_stdout.strip(), title="Execution Log", border_style="blue")
        )

    if per_file:
        if result.documents:
            console.print(_build_documents_table(result))
        else:
            console.print("[dim]No documents were found.[/dim]")

    console.print(
        f"[dim]{len(result.documents)} documents scanned, "
        f"{result.documents_with_resources} declaring resources.[/dim]"
    )
    if result.skipped:
        console.print(
            f"[yellow]Skipped {len(result.skipped)} unreadable files.[/yellow]"
        )

    console.print(_build_totals_table(result.totals))
