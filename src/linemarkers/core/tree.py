# src/linemarkers/core/tree.py
from typing import Callable, Dict, Iterable, Iterator, List

from linemarkers.config import ROOT_NAME
from linemarkers.models import FileRecord

class IncludeTree:
    """
    Append-only storage of FileRecords forming a rooted tree.

    `files[0]` is always the synthetic root; the remaining records follow in
    creation order. Parent records reference their children directly, so a
    copy must remap those references into the new storage.
    """

    def __init__(self):
        self.files: List[FileRecord] = [FileRecord(included_at_line=0, name=ROOT_NAME)]
        self.root: FileRecord = self.files[0]

    @classmethod
    def from_stream(cls, lines: Iterable[str], retain_content: bool = True) -> "IncludeTree":
        """
        Parses every line of `lines` and returns the finalized tree.

        Errors raised by the line source propagate; no partial tree is returned.
        """
        # Imported here, the parser module depends on this one.
        from linemarkers.core.parser import LineMarkersParser

        parser = LineMarkersParser(retain_content=retain_content)
        for line in lines:
            if line.endswith("\n"):
                line = line[:-1]
            parser.parse_line(line)
        parser.finalize()
        return parser.tree

    def add_child(self, parent: FileRecord, name: str) -> FileRecord:
        """Creates a record included from `parent` at its current line."""
        child = FileRecord(
            included_at_line=parent.last_seen_line,
            name=name,
            depth=parent.depth + 1,
        )
        self.files.append(child)
        parent.children.append(child)
        return child

    def copy(self) -> "IncludeTree":
        new_tree = IncludeTree.__new__(IncludeTree)
        new_tree.files = [
            FileRecord(
                included_at_line=f.included_at_line,
                name=f.name,
                content_lines=list(f.content_lines),
                depth=f.depth,
                own_line_count=f.own_line_count,
                cumulative_line_count=f.cumulative_line_count,
                last_seen_line=f.last_seen_line,
            )
            for f in self.files
        ]
        new_tree.root = new_tree.files[0]
        new_tree._relocate_children(self)
        return new_tree

    def _relocate_children(self, other: "IncludeTree") -> None:
        # Translate each child reference by its offset in the source storage
        offsets: Dict[int, int] = {id(f): i for i, f in enumerate(other.files)}
        for src, dst in zip(other.files, self.files):
            dst.children = [self.files[offsets[id(child)]] for child in src.children]

    def __copy__(self) -> "IncludeTree":
        return self.copy()

    def __deepcopy__(self, memo) -> "IncludeTree":
        return self.copy()

    def __len__(self) -> int:
        return len(self.files)

    def __repr__(self) -> str:
        return f"IncludeTree(files={len(self.files)})"

def iter_preorder(tree: IncludeTree) -> Iterator[FileRecord]:
    """Yields every non-root record, parents before children, depth first."""
    stack = list(reversed(tree.root.children))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))

def preorder_walk(tree: IncludeTree, visitor: Callable[[FileRecord], None]) -> None:
    for record in iter_preorder(tree):
        visitor(record)
