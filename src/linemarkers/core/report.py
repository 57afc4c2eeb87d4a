# src/linemarkers/core/report.py
from typing import List, Optional

import pathspec

from linemarkers.config import REPORT_INDENT
from linemarkers.core.ignore import is_ignored
from linemarkers.core.tree import IncludeTree, iter_preorder
from linemarkers.models import ReportEntry

def build_report(tree: IncludeTree, ignore_spec: Optional[pathspec.PathSpec] = None) -> List[ReportEntry]:
    """
    Projects every non-root record of `tree` into a ReportEntry, in preorder.
    A record matching `ignore_spec` is hidden along with its whole subtree.
    """
    entries: List[ReportEntry] = []
    hidden_depth: Optional[int] = None

    for record in iter_preorder(tree):
        # Descendants follow their ancestor contiguously in preorder
        if hidden_depth is not None:
            if record.depth > hidden_depth:
                continue
            hidden_depth = None

        if is_ignored(record.name, ignore_spec):
            hidden_depth = record.depth
            continue

        entries.append(ReportEntry(
            depth=record.depth,
            included_at_line=record.included_at_line,
            name=record.name,
            own_line_count=record.own_line_count,
            cumulative_line_count=record.cumulative_line_count,
            content_lines=tuple(record.content_lines),
        ))

    return entries

def format_entry(entry: ReportEntry, line_prefix: str = "") -> str:
    line = (
        f"{REPORT_INDENT * (entry.depth - 1)}{entry.included_at_line} {entry.name} "
        f"({entry.own_line_count} / {entry.cumulative_line_count})"
    )
    if line_prefix:
        return f"{line_prefix} {line}"
    return line

def render_report(entries: List[ReportEntry], line_prefix: str = "") -> str:
    """Renders report rows, one per line."""
    if not entries:
        return ""
    return "\n".join(format_entry(e, line_prefix) for e in entries) + "\n"
