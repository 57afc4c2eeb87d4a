# src/linemarkers/core/parser.py
import logging
from typing import List, Optional, Set, Tuple

from linemarkers.config import (
    FLAG_ENTER_INCLUDE,
    FLAG_RETURN_FROM_INCLUDE,
    INCLUDE_LINE_TEMPLATE,
    LINE_JUMP_TEMPLATE,
    LINEMARKER_PATTERN,
)
from linemarkers.core.tree import IncludeTree
from linemarkers.models import FileRecord

logger = logging.getLogger(__name__)

def parse_linemarker(line: str) -> Optional[Tuple[int, str, Set[int]]]:
    """
    Matches a preprocessor line marker.
    Returns (linenum, filename, flags), or None for an ordinary content line.
    """
    match = LINEMARKER_PATTERN.fullmatch(line)
    if match is None:
        return None
    flags = {int(flag) for flag in match.groups()[2:] if flag}
    return int(match.group(1)), match.group(2), flags

class LineMarkersParser:
    """
    Builds an IncludeTree from preprocessed output, one line at a time.

    Keeps a stack of the currently open files. The root record sits at the
    bottom and is never popped.
    """

    def __init__(self, retain_content: bool = True):
        self._tree = IncludeTree()
        self._stack: List[FileRecord] = [self._tree.root]
        self.in_preamble = False
        self.retain_content = retain_content
        self._finalized = False

    @property
    def tree(self) -> IncludeTree:
        return self._tree

    @property
    def current(self) -> FileRecord:
        return self._stack[-1]

    @property
    def stack_names(self) -> List[str]:
        return [f.name for f in self._stack]

    def parse_line(self, line: str) -> None:
        if self._finalized:
            raise RuntimeError("Cannot parse lines after finalize()")

        if self.in_preamble:
            self.in_preamble = line != f'# 1 "{self.current.name}"'
            if self.in_preamble:
                logger.debug("In preamble for %s, ignoring: %s", self.current.name, line)
            else:
                logger.debug("End of preamble for %s", self.current.name)
            return

        marker = parse_linemarker(line)
        if marker is None:
            self._add_content_line(line)
            return

        linenum, filename, flags = marker
        if FLAG_ENTER_INCLUDE in flags:
            self._enter_include(filename)
        elif FLAG_RETURN_FROM_INCLUDE in flags:
            self._return_from_include(linenum)
        elif filename == self.current.name:
            self._jump_to_line(linenum)
        else:
            self._start_root_file(filename)

    def finalize(self) -> IncludeTree:
        """Closes every open file so that cumulative counts are settled."""
        if self._finalized:
            return self._tree
        while len(self._stack) > 1:
            self._pop()
        # The root is never popped; lines seen before the first marker are its own
        self._tree.root.cumulative_line_count += self._tree.root.own_line_count
        self._finalized = True
        return self._tree

    # --- Transitions ---

    def _add_content_line(self, line: str) -> None:
        current = self.current
        current.last_seen_line += 1
        current.own_line_count += 1
        if self.retain_content:
            current.content_lines.append(line)

    def _enter_include(self, filename: str) -> None:
        # The #include directive itself is one line of the parent
        parent = self.current
        parent.last_seen_line += 1
        parent.own_line_count += 1
        logger.debug("%s:%d includes %s", parent.name, parent.last_seen_line, filename)
        self._push(filename)

    def _return_from_include(self, linenum: int) -> None:
        if len(self._stack) == 1:
            logger.debug("Return marker with no open include, ignoring")
            return
        closed = self._pop()
        # The marker carries the number of the next line of the resumed file
        self.current.last_seen_line = max(linenum - 1, 0)
        logger.debug(
            "Exiting %s, returning to %s:%d", closed.name, self.current.name, self.current.last_seen_line
        )

    def _jump_to_line(self, linenum: int) -> None:
        # Blank lines elided by the preprocessor
        self.current.last_seen_line = max(linenum - 1, 0)
        if self.retain_content:
            self.current.content_lines.append(LINE_JUMP_TEMPLATE.format(linenum=linenum))

    def _start_root_file(self, filename: str) -> None:
        while len(self._stack) > 1:
            self._pop()
        self._push(filename)
        self.in_preamble = True
        logger.debug("Adding root source file %s", filename)

    # --- Stack helpers ---

    def _push(self, filename: str) -> FileRecord:
        parent = self.current
        child = self._tree.add_child(parent, filename)
        if self.retain_content:
            parent.content_lines.append(INCLUDE_LINE_TEMPLATE.format(name=filename))
        self._stack.append(child)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Stack: %s", " ".join(self.stack_names))
        return child

    def _pop(self) -> FileRecord:
        closed = self._stack.pop()
        closed.cumulative_line_count += closed.own_line_count
        self.current.cumulative_line_count += closed.cumulative_line_count
        return closed
