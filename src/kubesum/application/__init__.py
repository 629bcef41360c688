"""Application facade exports for stable use-case API."""

from kubesum.application.run_writer import RunResult
from kubesum.application.scan_service import DocumentSummary, ScanResult
from kubesum.application.scan_use_case import execute_scan

__all__ = [
    "DocumentSummary",
    "RunResult",
    "ScanResult",
    "execute_scan",
]
