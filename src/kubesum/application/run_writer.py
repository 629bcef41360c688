"""Run directory writer for persisted scan reports."""

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

RunStatus = Literal["success", "failed"]


@dataclass(frozen=True)
class RunResult:
    """Files produced by a persisted run."""

    run_id: str
    capability: str
    output_dir: Path
    manifest_path: Path
    summary_path: Path
    output_files: tuple[Path, ...]
    status: RunStatus = "success"
    error: str | None = None


@dataclass(frozen=True)
class RunContext:
    """Context for an in-progress run."""

    run_id: str
    capability: str
    output_dir: Path
    started_at: str
    inputs: dict[str, Any]


@dataclass(frozen=True)
class SummaryContent:
    """Payload rendered into summary.md."""

    title: str
    totals: dict[str, int | float] | None = None
    warnings: list[str] | None = None
    inputs: dict[str, Any] | None = None


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def create_run(
    capability: str,
    *,
    inputs: dict[str, Any],
    reports_root: str = "reports",
) -> RunContext:
    """Create run directory context."""
    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path(reports_root) / capability / run_id
    output_dir.mkdir(parents=True, exist_ok=True)
    return RunContext(
        run_id=run_id,
        capability=capability,
        output_dir=output_dir,
        started_at=_utc_now_iso(),
        inputs=inputs,
    )


def list_output_files(output_dir: Path) -> tuple[Path, ...]:
    """List report artifacts under output directory."""
    return tuple(sorted(p for p in output_dir.rglob("*") if p.is_file()))


def build_summary_lines(
    content: SummaryContent,
    capability: str,
    output_files: tuple[Path, ...],
) -> list[str]:
    """Build summary markdown lines."""
    inputs = content.inputs or {}

    lines = [f"# {content.title}", "", "## Inputs"]
    if inputs:
        for key in sorted(inputs):
            lines.append(f"- `{key}`: `{inputs[key]}`")
    else:
        lines.append("- (none)")

    lines.extend(["", "## Totals"])
    if content.totals:
        for key, value in content.totals.items():
            lines.append(f"- `{key}`: `{value}`")
    else:
        lines.append("- (none)")

    lines.extend(["", "## Outputs", f"- `capability`: `{capability}`"])
    if output_files:
        lines.append("- `artifacts`:")
        lines.extend(f"  - `{p.name}`" for p in output_files)
    else:
        lines.append("- `artifacts`: (none)")

    lines.extend(["", "## Warnings"])
    if content.warnings:
        lines.extend(f"- {item}" for item in content.warnings)
    else:
        lines.append("- None.")

    return lines


def finalize_run(
    ctx: RunContext,
    *,
    status: RunStatus,
    output_files: tuple[Path, ...],
    summary_lines: list[str],
    error: str | None = None,
) -> RunResult:
    """Write summary.md and manifest.json and return run result.

    A failed run keeps whatever artifacts were written before the failure
    and records `error` in both files.
    """
    if error is not None:
        summary_lines = [*summary_lines, "", "## Error", f"- {error}"]
    summary_path = ctx.output_dir / "summary.md"
    summary_path.write_text("\n".join(summary_lines) + "\n", encoding="utf-8")

    manifest_path = ctx.output_dir / "manifest.json"
    all_outputs = tuple(output_files) + (summary_path,)

    manifest_payload = {
        "run_id": ctx.run_id,
        "capability": ctx.capability,
        "started_at": ctx.started_at,
        "finished_at": _utc_now_iso(),
        "status": status,
        "inputs": ctx.inputs,
        "outputs": [str(p.relative_to(ctx.output_dir)) for p in all_outputs]
        + ["manifest.json"],
        "error": error,
    }
    manifest_path.write_text(
        json.dumps(manifest_payload, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )

    return RunResult(
        run_id=ctx.run_id,
        capability=ctx.capability,
        output_dir=ctx.output_dir,
        manifest_path=manifest_path,
        summary_path=summary_path,
        output_files=all_outputs + (manifest_path,),
        status=status,
        error=error,
    )
