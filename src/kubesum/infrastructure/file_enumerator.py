"""Filesystem helpers for locating and reading manifest documents."""

from pathlib import Path


def find_documents(root: Path, extension: str) -> tuple[Path, ...]:
    """List files ending in `.extension` anywhere under `root`.

    A missing root or a root that is not a directory yields no documents.
    """
    if not root.is_dir():
        return ()
    suffix = f".{extension}"
    return tuple(
        sorted(p for p in root.rglob("*") if p.suffix == suffix and p.is_file())
    )


def read_document(path: Path, encoding: str = "utf-8") -> str | None:
    """Return file contents, or None when the file cannot be read or decoded."""
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError):
        return None
