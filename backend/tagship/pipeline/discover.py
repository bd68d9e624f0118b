"""
TagShip — Asset file discovery.

Expands glob patterns (``dist/*.tar.gz``, ``build/**/*.zip``) relative to a
working directory into an ordered, de-duplicated list of file paths.
Directories are skipped. An empty result is not an error here; the asset
publisher decides what to do with it.
"""

from __future__ import annotations

import glob
import os
from pathlib import Path


def normalize_patterns(patterns: str | list[str] | None) -> list[str]:
    """Accept one pattern, a comma-separated string, or a list of patterns."""
    if not patterns:
        return []
    if isinstance(patterns, str):
        patterns = patterns.split(",")
    return [p.strip() for p in patterns if p and p.strip()]


def discover_files(patterns: list[str], cwd: str | Path) -> list[str]:
    base = Path(cwd)
    seen: set[str] = set()
    files: list[str] = []

    for pattern in patterns:
        if os.path.isabs(pattern):
            matches = sorted(glob.glob(pattern, recursive=True))
        else:
            matches = sorted(
                str(base / m) for m in glob.glob(pattern, root_dir=base, recursive=True)
            )
        for path in matches:
            if path in seen or not os.path.isfile(path):
                continue
            seen.add(path)
            files.append(path)

    return files
