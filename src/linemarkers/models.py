# src/linemarkers/models.py
from dataclasses import dataclass, field
from typing import List, Tuple

@dataclass
class FileRecord:
    """One appearance of a file in the include tree."""
    included_at_line: int
    name: str
    content_lines: List[str] = field(default_factory=list)
    children: List["FileRecord"] = field(default_factory=list, repr=False)
    depth: int = 0
    own_line_count: int = 0
    cumulative_line_count: int = 0
    last_seen_line: int = 0

@dataclass(frozen=True)
class ReportEntry:
    """Immutable row of the include report."""
    depth: int
    included_at_line: int
    name: str
    own_line_count: int
    cumulative_line_count: int
    content_lines: Tuple[str, ...] = ()
