from __future__ import annotations

from pathlib import Path
from typing import Optional

# Default location for exported score tables and round journals.
RESULTS_DIR = Path(__file__).resolve().parent / "results"


def ensure_results_dir(results_dir: Optional[Path] = None) -> Path:
    """Create the results directory if it does not exist and return it."""
    target = Path(results_dir) if results_dir is not None else RESULTS_DIR
    target.mkdir(parents=True, exist_ok=True)
    return target


def resolve_results_path(
    path_like: str | Path,
    results_dir: Optional[Path] = None,
) -> Path:
    """
    Resolve a user-specified path into the results directory.

    Absolute paths are returned unchanged. Relative paths are anchored inside
    the results directory so exports land in one place.
    """
    path = Path(path_like)
    if path.is_absolute():
        return path
    return ensure_results_dir(results_dir) / path
