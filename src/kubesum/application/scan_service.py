"""Directory scan: enumerate manifests, summarize each, fold the totals."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from kubesum.config import ScanConfig
from kubesum.domain.aggregator import combine, summarize
from kubesum.domain.resource_totals import ZERO_TOTALS, ResourceTotals
from kubesum.infrastructure.file_enumerator import find_documents, read_document


@dataclass(frozen=True)
class DocumentSummary:
    """Totals declared in a single manifest."""

    path: Path
    totals: ResourceTotals


@dataclass(frozen=True)
class ScanResult:
    """Outcome of scanning one directory tree."""

    root: Path
    totals: ResourceTotals
    documents: tuple[DocumentSummary, ...]
    skipped: tuple[Path, ...]

    @property
    def documents_with_resources(self) -> int:
        """Return number of documents declaring at least one section."""
        return sum(1 for d in self.documents if d.totals != ZERO_TOTALS)


def scan_directory(root: Path, config: ScanConfig | None = None) -> ScanResult:
    """Scan `root` recursively and aggregate resources of every document."""
    config = config or ScanConfig()
    print(f"🔍 Collecting *.{config.extension} documents...")

    documents: list[DocumentSummary] = []
    skipped: list[Path] = []
    for path in find_documents(root, config.extension):
        text = read_document(path, config.encoding)
        if text is None:
            skipped.append(path)
            continue
        documents.append(
            DocumentSummary(path=path, totals=summarize(text, config.patterns))
        )

    print(f"  → {len(documents)} *.{config.extension} documents read")
    if skipped:
        print(f"  → {len(skipped)} unreadable documents skipped")

    return ScanResult(
        root=root,
        totals=combine(d.totals for d in documents),
        documents=tuple(documents),
        skipped=tuple(skipped),
    )
