"""Tests for directory scanning and persisted reports."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from kubesum.application._scan_reports import (
    generate_documents_csv,
    generate_totals_json,
)
from kubesum.application.scan_service import scan_directory
from kubesum.application.scan_use_case import execute_scan
from kubesum.config import ScanConfig
from kubesum.domain.resource_totals import ZERO_TOTALS, ResourceTotals

DEPLOYMENT = """\
kind: Deployment
spec:
  template:
    spec:
      containers:
        - name: api
          resources:
            requests:
              cpu: "250m"
              memory: 64M
            limits:
              cpu: "500m"
              memory: 128M
"""

JOB = """\
kind: Job
spec:
  template:
    spec:
      containers:
        - name: worker
          resources:
            requests:
              memory: "256Mi"
              cpu: "1000m"
"""


@pytest.fixture
def manifests(tmp_path: Path) -> Path:
    (tmp_path / "apps" / "api").mkdir(parents=True)
    (tmp_path / "apps" / "api" / "deployment.yaml").write_text(
        DEPLOYMENT, encoding="utf-8"
    )
    (tmp_path / "jobs").mkdir()
    (tmp_path / "jobs" / "job.yaml").write_text(JOB, encoding="utf-8")
    (tmp_path / "jobs" / "job.yml").write_text(JOB, encoding="utf-8")
    (tmp_path / "README.md").write_text(DEPLOYMENT, encoding="utf-8")
    (tmp_path / "broken.yaml").write_bytes(b"\xff\xfe\xfa")
    return tmp_path


def test_scan_directory_totals(manifests: Path) -> None:
    result = scan_directory(manifests)
    assert result.root == manifests
    assert result.totals == ResourceTotals(
        memory_requested=320,
        memory_limit=128,
        cpu_requested=1.25,
        cpu_limit=0.5,
    )
    assert len(result.documents) == 2
    assert result.documents_with_resources == 2
    assert result.skipped == (manifests / "broken.yaml",)


def test_scan_directory_custom_extension(manifests: Path) -> None:
    result = scan_directory(manifests, ScanConfig(extension="yml"))
    assert result.totals == ResourceTotals(memory_requested=256, cpu_requested=1.0)
    assert result.skipped == ()


def test_scan_directory_prints_progress(
    manifests: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    scan_directory(manifests)
    out = capsys.readouterr().out
    assert "Collecting *.yaml documents" in out
    assert "Analyzing kubernetes configs" not in out
    assert "2 *.yaml documents read" in out
    assert "1 unreadable documents skipped" in out


def test_scan_missing_root(tmp_path: Path) -> None:
    result = scan_directory(tmp_path / "missing")
    assert result.totals == ZERO_TOTALS
    assert result.documents == ()
    assert result.skipped == ()


def test_scan_empty_root(tmp_path: Path) -> None:
    result = scan_directory(tmp_path)
    assert result.totals == ZERO_TOTALS
    assert result.documents_with_resources == 0


def test_reports_written(manifests: Path, tmp_path: Path) -> None:
    result = scan_directory(manifests)
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    csv_path = generate_documents_csv(result, "20240101_000000", out_dir)
    json_path = generate_totals_json(result, "20240101_000000", out_dir)

    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "path,memory_requested,memory_limit,cpu_requested,cpu_limit"
    assert "apps/api/deployment.yaml,64,128,0.25,0.5" in lines
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["documents"] == 2
    assert payload["documents_with_resources"] == 2
    assert payload["totals"]["memory_requested"] == 320
    assert payload["skipped"] == [str(manifests / "broken.yaml")]


def test_execute_scan_stdout_only(
    manifests: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    result, run = execute_scan(manifests, per_file=True)
    assert run is None
    assert result.totals.cpu_requested == 1.25
    out = capsys.readouterr().out
    assert "Execution Log" in out
    assert "Total resources" in out
    assert "1.250" in out
    assert out.count("Analyzing kubernetes configs in") == 1
    assert "2 documents scanned, 2 declaring resources" in out


def test_execute_scan_with_report(manifests: Path, tmp_path: Path) -> None:
    reports = tmp_path / "reports"
    _, run = execute_scan(manifests, reports_root=str(reports))
    assert run is not None
    assert run.capability == "resource-scan"
    assert run.output_dir.parent == reports / "resource-scan"
    assert run.manifest_path.exists()
    summary = run.summary_path.read_text(encoding="utf-8")
    assert "# Resource Scan" in summary
    assert "- `memory_requested`: `320`" in summary
    assert "Unreadable file skipped" in summary
    names = {p.name for p in run.output_files}
    assert f"documents_{run.run_id}.csv" in names
    assert f"totals_{run.run_id}.json" in names


def test_oversized_quantity_does_not_abort_scan(manifests: Path) -> None:
    (manifests / "huge.yaml").write_text(
        'requests:\n  cpu: "' + "9" * 400 + 'm"\n  memory: ' + "9" * 400 + "\n",
        encoding="utf-8",
    )
    result = scan_directory(manifests)
    assert len(result.documents) == 3
    assert result.totals == ResourceTotals(
        memory_requested=320,
        memory_limit=128,
        cpu_requested=1.25,
        cpu_limit=0.5,
    )


def test_execute_scan_report_write_failure(manifests: Path, tmp_path: Path) -> None:
    with patch(
        "kubesum.application.scan_use_case.generate_totals_json",
        side_effect=OSError("disk full"),
    ):
        result, run = execute_scan(manifests, reports_root=str(tmp_path / "reports"))

    assert result.totals.memory_requested == 320
    assert run is not None
    assert run.status == "failed"
    assert run.error is not None and "disk full" in run.error
    manifest = json.loads(run.manifest_path.read_text(encoding="utf-8"))
    assert manifest["status"] == "failed"
    assert "disk full" in manifest["error"]
    assert f"documents_{run.run_id}.csv" in manifest["outputs"]
    assert "## Error" in run.summary_path.read_text(encoding="utf-8")
