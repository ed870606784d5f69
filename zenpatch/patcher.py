"""Backtracking application of patch chunks to a list of lines."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence, Set, Tuple

from .errors import AmbiguousPatch, PatchConflict
from .models import Chunk, LineType

MAX_BACKTRACK_NODES = 100_000
"""Search nodes visited before the patch is treated as ambiguous."""

_NO_SOLUTION = (
    "No valid patch application sequence found - "
    "please fix the patch include more context"
)
_AMBIGUOUS = (
    "Patch application is ambiguous - please include more context "
    "before or after insertions or deletions"
)

_SUPER_NORMALISE_TABLE = str.maketrans(
    {
        **{c: "-" for c in "\u2010\u2011\u2012\u2013\u2014\u2015\u2212"},
        **{c: "'" for c in "\u2018\u2019\u201a\u201b"},
        **{c: '"' for c in "\u201c\u201d\u201e\u201f"},
        **{
            c: " "
            for c in (
                "\u00a0\u2002\u2003\u2004\u2005\u2006\u2007"
                "\u2008\u2009\u200a\u202f\u205f\u3000"
            )
        },
    }
)

# A placement pairs a chunk index with the start line it matched in the input.
Placement = Tuple[int, int]


class WhitespaceMode(Enum):
    """How strictly lines are compared when matching a patch."""

    STRICT = "strict"
    """Lines must be identical."""
    LENIENT = "lenient"
    """Surrounding whitespace is ignored and inner runs collapse to one space."""
    SUPER_LENIENT = "super_lenient"
    """As lenient, and typographic dashes, quotes and spaces count as plain ones."""


def _normalize(text: str) -> str:
    return " ".join(text.split())


def _super_normalise(text: str) -> str:
    return text.strip().translate(_SUPER_NORMALISE_TABLE)


def match_line(a: str, b: str, mode: WhitespaceMode) -> bool:
    """Return whether two lines are equal under the given whitespace mode."""
    if mode is WhitespaceMode.STRICT:
        return a == b
    if mode is WhitespaceMode.LENIENT:
        return _normalize(a) == _normalize(b)
    return _super_normalise(_normalize(a)) == _super_normalise(_normalize(b))


def _leading_context(chunk: Chunk) -> List[str]:
    context = []
    for line_type, content in chunk.lines:
        if line_type is not LineType.CONTEXT:
            break
        context.append(content)
    return context


def _trailing_context(chunk: Chunk) -> List[str]:
    """Non-blank context lines at the end of the chunk, in order."""
    context = []
    for line_type, content in reversed(chunk.lines):
        if line_type is not LineType.CONTEXT:
            break
        if content.strip():
            context.append(content)
    context.reverse()
    return context


def _deletion_offset(chunk: Chunk, mode: WhitespaceMode) -> int:
    """Offset from a match position to the first deleted line."""
    pre_len = len(_leading_context(chunk))
    if pre_len and chunk.del_lines and pre_len < len(chunk.lines):
        _, context = chunk.lines[pre_len - 1]
        next_type, next_content = chunk.lines[pre_len]
        if next_type is LineType.DELETION and match_line(context, next_content, mode):
            return pre_len - 1
    return pre_len


def _deletions_match(
    lines: Sequence[str], chunk: Chunk, pos: int, mode: WhitespaceMode
) -> bool:
    start = pos + _deletion_offset(chunk, mode)
    if start + len(chunk.del_lines) > len(lines):
        return False
    return all(
        match_line(lines[start + j], deleted, mode)
        for j, deleted in enumerate(chunk.del_lines)
    )


def _affected_indices(chunk: Chunk, pos: int, mode: WhitespaceMode) -> range:
    start = pos + _deletion_offset(chunk, mode)
    return range(start, start + len(chunk.del_lines))


def _match_positions(
    lines: Sequence[str], chunk: Chunk, mode: WhitespaceMode
) -> List[int]:
    pre = _leading_context(chunk)

    if not pre:
        if not chunk.del_lines:
            return [min(chunk.orig_index, len(lines))]
        size = len(chunk.del_lines)
        return [
            i
            for i in range(len(lines) - size + 1)
            if all(
                match_line(lines[i + j], deleted, mode)
                for j, deleted in enumerate(chunk.del_lines)
            )
        ]

    if len(lines) < len(pre):
        return []

    positions = [
        i
        for i in range(len(lines) - len(pre) + 1)
        if all(match_line(lines[i + j], ctx, mode) for j, ctx in enumerate(pre))
    ]

    post = _trailing_context(chunk)

    if not chunk.del_lines and chunk.ins_lines and post:
        anchor = post[0]
        window = len(pre)

        def anchored(pos: int) -> bool:
            start = pos + window
            end = min(len(lines), start + window + 10)
            return any(match_line(lines[i], anchor, mode) for i in range(start, end))

        positions = [pos for pos in positions if anchored(pos)]

    if not post and not positions and mode is WhitespaceMode.LENIENT:
        anchor_idx = len(pre) - 1
        anchor_line = pre[anchor_idx]
        positions = [
            max(0, i - anchor_idx)
            for i, line in enumerate(lines)
            if match_line(line, anchor_line, WhitespaceMode.LENIENT)
        ]

    return positions


def _apply_chunk(
    lines: List[str], chunk: Chunk, pos: int, mode: WhitespaceMode
) -> List[str]:
    start = pos + _deletion_offset(chunk, mode)
    head_end = min(start, len(lines))
    tail_start = min(start + len(chunk.del_lines), len(lines))
    return lines[:head_end] + list(chunk.ins_lines) + lines[tail_start:]


def _apply_placements(
    lines: Sequence[str],
    chunks: Sequence[Chunk],
    placements: Sequence[Placement],
    mode: WhitespaceMode,
) -> List[str]:
    result = list(lines)
    delta = 0
    for chunk_idx, start_pos in sorted(placements, key=lambda item: item[1]):
        chunk = chunks[chunk_idx]
        result = _apply_chunk(result, chunk, max(0, start_pos + delta), mode)
        delta += len(chunk.ins_lines) - len(chunk.del_lines)
    return result


@dataclass
class _SearchState:
    applied_chunks: Set[int] = field(default_factory=set)
    modified_indices: Set[int] = field(default_factory=set)
    solution_count: int = 0
    first_solution_result: Optional[List[str]] = None
    solution_path: Optional[List[Placement]] = None

    def branch(self) -> "_SearchState":
        return replace(
            self,
            applied_chunks=set(self.applied_chunks),
            modified_indices=set(self.modified_indices),
        )


class _Search:
    """Exhaustive search for a unique placement of every chunk."""

    def __init__(
        self, lines: Sequence[str], chunks: Sequence[Chunk], mode: WhitespaceMode
    ) -> None:
        self.lines = lines
        self.chunks = chunks
        self.mode = mode
        self.nodes = 0

    def fixed_placements(self) -> Tuple[List[Placement], _SearchState]:
        """Place every chunk that has exactly one valid, non-overlapping position."""
        path: List[Placement] = []
        state = _SearchState()
        for chunk_idx, chunk in enumerate(self.chunks):
            valid = [
                pos
                for pos in _match_positions(self.lines, chunk, self.mode)
                if _deletions_match(self.lines, chunk, pos, self.mode)
            ]
            if len(valid) != 1:
                continue
            pos = valid[0]
            affected = _affected_indices(chunk, pos, self.mode)
            if any(idx in state.modified_indices for idx in affected):
                continue
            state.applied_chunks.add(chunk_idx)
            state.modified_indices.update(affected)
            path.append((chunk_idx, pos))
        return path, state

    def run(self, state: _SearchState, path: List[Placement]) -> None:
        self.nodes += 1
        if self.nodes > MAX_BACKTRACK_NODES or state.solution_count > 1:
            state.solution_count = 2
            return

        if len(path) == len(self.chunks):
            candidate = _apply_placements(self.lines, self.chunks, path, self.mode)
            if state.solution_count == 0:
                state.solution_count = 1
                state.first_solution_result = candidate
                state.solution_path = list(path)
            elif state.first_solution_result != candidate:
                state.solution_count = 2
            return

        pending = [
            chunk.orig_index
            for idx, chunk in enumerate(self.chunks)
            if idx not in state.applied_chunks
        ]
        min_orig = min(pending) if pending else None

        for idx, chunk in enumerate(self.chunks):
            if idx in state.applied_chunks:
                continue
            if min_orig is not None and chunk.orig_index != min_orig:
                continue
            for pos in _match_positions(self.lines, chunk, self.mode):
                if not _deletions_match(self.lines, chunk, pos, self.mode):
                    continue
                affected = _affected_indices(chunk, pos, self.mode)
                if any(i in state.modified_indices for i in affected):
                    continue

                next_state = state.branch()
                next_state.applied_chunks.add(idx)
                next_state.modified_indices.update(affected)
                self.run(next_state, path + [(idx, pos)])

                state.solution_count = next_state.solution_count
                if state.solution_count == 1:
                    state.first_solution_result = next_state.first_solution_result
                    state.solution_path = next_state.solution_path
                if state.solution_count > 1:
                    return


def apply_patch_backtracking(
    original_lines: Sequence[str],
    chunks: Sequence[Chunk],
    mode: WhitespaceMode = WhitespaceMode.STRICT,
) -> List[str]:
    """Apply chunks to the lines and return the patched lines.

    Raises PatchConflict when no placement of the chunks fits and
    AmbiguousPatch when several placements give different results.
    """
    if not original_lines and all(not chunk.del_lines for chunk in chunks):
        return [line for chunk in chunks for line in chunk.ins_lines]

    search = _Search(list(original_lines), chunks, mode)
    path, state = search.fixed_placements()
    search.run(state, path)

    if state.solution_count == 0:
        raise PatchConflict(_NO_SOLUTION)
    if state.solution_count > 1:
        raise AmbiguousPatch(_AMBIGUOUS)

    assert state.solution_path is not None
    return _apply_placements(original_lines, chunks, state.solution_path, mode)