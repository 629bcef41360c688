"""CLI entrypoint for kubesum."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from pathlib import Path

import typer
from rich.console import Console

from kubesum.application import execute_scan
from kubesum.config import DEFAULT_EXTENSION, load_config

app = typer.Typer(
    name="kubesum",
    help="Sum container CPU/memory requests and limits declared in manifests.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def _resolve_version() -> str:
    """Return installed package version or local fallback."""
    try:
        return package_version("kubesum")
    except PackageNotFoundError:
        return "0.1.0"


def _handle_error(exc: Exception) -> None:
    """Convert domain exceptions to CLI exit codes."""
    if isinstance(exc, ValueError):
        console.print(f"[red]ERROR:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    if isinstance(exc, (RuntimeError, OSError)):
        console.print(f"[red]ERROR:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    raise exc


@app.command()
def scan_command(
    directory: Path | None = typer.Argument(
        None,
        help="Directory to scan recursively. Defaults to the current directory.",
        show_default=False,
    ),
    extension: str = typer.Option(
        DEFAULT_EXTENSION,
        "--extension",
        "-e",
        help="Extension of manifest files, without the dot.",
    ),
    per_file: bool = typer.Option(
        False,
        "--per-file",
        help="Also print totals for every document.",
    ),
    report: str | None = typer.Option(
        None,
        "--report",
        "-r",
        help=(
            "Persist report files under this directory. "
            "If omitted, prints stdout only."
        ),
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
    ),
) -> None:
    """Analyze kubernetes configs and print total requested/limit resources."""
    if version:
        console.print(f"kubesum {_resolve_version()}")
        raise typer.Exit(code=0)
    try:
        config = load_config(extension=extension)
        root = (directory if directory is not None else Path.cwd()).resolve()
        _, run = execute_scan(
            root,
            config=config,
            reports_root=report,
            per_file=per_file,
        )
    except (ValueError, RuntimeError, OSError) as exc:
        _handle_error(exc)
        return
    if run is None:
        return
    if run.status == "failed":
        console.print(f"[red]ERROR:[/red] {run.error}")
        console.print(f"[yellow]Run:[/yellow] {run.output_dir}")
        raise typer.Exit(code=2)
    console.print(f"[green]Run:[/green] {run.output_dir}")


def main() -> None:
    """Project entrypoint for `kubesum` script."""
    app()


if __name__ == "__main__":
    main()
