"""Report files written for persisted scan runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from kubesum.application.scan_service import ScanResult

_DOCUMENT_COLUMNS = (
    "path",
    "memory_requested",
    "memory_limit",
    "cpu_requested",
    "cpu_limit",
)


def generate_documents_csv(result: ScanResult, timestamp: str, data_dir: Path) -> Path:
    """Generate per-document totals report."""
    filename = data_dir / f"documents_{timestamp}.csv"
    rows: list[dict[str, Any]] = []
    for document in result.documents:
        path = document.path
        if path.is_relative_to(result.root):
            path = path.relative_to(result.root)
        rows.append({"path": str(path), **document.totals.to_dict()})
    pd.DataFrame(rows, columns=list(_DOCUMENT_COLUMNS)).to_csv(filename, index=False)
    print(f"  → {filename}")
    return filename


def generate_totals_json(result: ScanResult, timestamp: str, data_dir: Path) -> Path:
    """Generate grand totals report."""
    filename = data_dir / f"totals_{timestamp}.json"
    payload = {
        "root": str(result.root),
        "documents": len(result.documents),
        "documents_with_resources": result.documents_with_resources,
        "skipped": [str(p) for p in result.skipped],
        "totals": result.totals.to_dict(),
    }
    filename.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    print(f"  → {filename}")
    return filename
