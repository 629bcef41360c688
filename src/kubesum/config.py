"""Scan configuration."""

from dataclasses import dataclass, field

from kubesum.domain.section_extractor import DEFAULT_PATTERNS, ExtractionPatterns

DEFAULT_EXTENSION = "yaml"


@dataclass(frozen=True)
class ScanConfig:
    """Settings controlling which documents are scanned and how."""

    extension: str = DEFAULT_EXTENSION
    encoding: str = "utf-8"
    patterns: ExtractionPatterns = field(default=DEFAULT_PATTERNS)

    def __post_init__(self) -> None:
        extension = self.extension.removeprefix(".")
        if not extension or any(sep in extension for sep in "/\\"):
            raise ValueError(f"invalid document extension: {self.extension!r}")
        object.__setattr__(self, "extension", extension)


def load_config(extension: str | None = None) -> ScanConfig:
    """Build config from optional CLI overrides."""
    if extension is None:
        return ScanConfig()
    return ScanConfig(extension=extension)
