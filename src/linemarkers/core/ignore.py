# src/linemarkers/core/ignore.py
import sys
from pathlib import Path
from typing import List, Optional

import pathspec

def load_ignore_spec(
    ignore_file: Optional[Path] = None,
    extra_patterns: Optional[List[str]] = None,
    warn_missing: bool = False,
) -> pathspec.PathSpec:
    """
    Loads gitwildmatch rules from an ignore file plus any extra patterns
    given on the command line. Bad rules degrade to an empty spec.
    A missing ignore file is only reported when `warn_missing` is set.
    """
    lines: List[str] = []

    if ignore_file is not None and ignore_file.is_file():
        try:
            with open(ignore_file, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            print(f"Warning: Could not read {ignore_file}: {e}", file=sys.stderr)
    elif ignore_file is not None and warn_missing:
        print(f"Warning: Ignore file {ignore_file} not found", file=sys.stderr)

    if extra_patterns:
        lines.extend(extra_patterns)

    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", lines)
    except Exception as e:
        print(f"Error parsing ignore rules: {e}", file=sys.stderr)
        return pathspec.PathSpec.from_lines("gitwildmatch", [])

def is_ignored(name: str, spec: Optional[pathspec.PathSpec]) -> bool:
    """True if a marker filename matches the ignore rules."""
    if spec is None:
        return False
    # Absolute header paths ('/usr/include/stdio.h') are matched from the filesystem root
    return spec.match_file(name.lstrip("/"))
