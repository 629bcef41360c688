"""Resource scan use-case."""

from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path

from kubesum.application._scan_reports import (
    generate_documents_csv,
    generate_totals_json,
)
from kubesum.application.run_writer import (
    RunResult,
    SummaryContent,
    build_summary_lines,
    create_run,
    finalize_run,
    list_output_files,
)
from kubesum.application.scan_service import ScanResult, scan_directory
from kubesum.application.stdout_renderer import render_scan_report
from kubesum.config import ScanConfig

CAPABILITY = "resource-scan"


def _persist(result: ScanResult, reports_root: str, config: ScanConfig) -> RunResult:
    ctx = create_run(
        CAPABILITY,
        inputs={"root": str(result.root), "extension": config.extension},
        reports_root=reports_root,
    )
    error: str | None = None
    try:
        generate_documents_csv(result, ctx.run_id, ctx.output_dir)
        generate_totals_json(result, ctx.run_id, ctx.output_dir)
    except OSError as exc:
        error = f"failed to write report files: {exc}"
        print(f"❌ {error}")
    output_files = list_output_files(ctx.output_dir)
    warnings = [f"Unreadable file skipped: {p}" for p in result.skipped]
    if not result.documents:
        warnings.append("No documents were found under the scan root.")
    summary = build_summary_lines(
        SummaryContent(
            title="Resource Scan",
            totals=result.totals.to_dict(),
            warnings=warnings,
            inputs=ctx.inputs,
        ),
        capability=ctx.capability,
        output_files=output_files,
    )
    return finalize_run(
        ctx,
        status="failed" if error else "success",
        output_files=output_files,
        summary_lines=summary,
        error=error,
    )


def execute_scan(
    root: Path,
    *,
    config: ScanConfig | None = None,
    reports_root: str | None = None,
    per_file: bool = False,
) -> tuple[ScanResult, RunResult | None]:
    """Scan `root` and render totals.

    When `reports_root` is None, runs in stdout-only mode and writes no files.
    """
    config = config or ScanConfig()
    buffer = StringIO()
    with redirect_stdout(buffer):
        result = scan_directory(root, config)
        run = _persist(result, reports_root, config) if reports_root else None
    render_scan_report(result, captured_stdout=buffer.getvalue(), per_file=per_file)
    return result, run


__all__ = ["CAPABILITY", "execute_scan"]
