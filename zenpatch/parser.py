"""Parsing of patch text into structured file actions."""

from __future__ import annotations

from typing import List, Optional

from .errors import InvalidPatchFormat
from .models import ActionType, Chunk, LineType, PatchAction

BEGIN_MARKER = "*** Begin Patch"
END_MARKER = "*** End Patch"

_ADD_PREFIX = "*** Add File: "
_UPDATE_PREFIX = "*** Update File: "
_DELETE_PREFIX = "*** Delete File: "
_MOVE_PREFIX = "*** Move to: "
_DIRECTIVE_STARTS = ("*** Add File:", "*** Update File:", "*** Delete File:")

_LINE_MARKERS = {
    " ": LineType.CONTEXT,
    "+": LineType.INSERTION,
    "-": LineType.DELETION,
}


def split_lines(text: str) -> List[str]:
    """Split text on newlines, dropping a final empty line and trailing carriage returns."""
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _strip_prefix_repeatedly(line: str, prefix: str) -> str:
    while prefix and line.startswith(prefix):
        line = line[len(prefix):]
    return line


class Parser:
    """Walks the lines of a patch and collects the file actions it describes."""

    def __init__(self, patch_content: str) -> None:
        self.lines: List[str] = (
            [] if not patch_content.strip() else split_lines(patch_content)
        )
        self.index = 0

    def parse(self) -> List[PatchAction]:
        """Parse every file directive in the patch.

        Raises InvalidPatchFormat if the patch holds no directive at all.
        """
        self.index = 1  # the first line is the begin marker
        actions: List[PatchAction] = []

        while self.index < len(self.lines) - 1:
            line = self.lines[self.index].strip()
            if line.startswith(_ADD_PREFIX):
                actions.append(self._parse_add_file())
            elif line.startswith(_UPDATE_PREFIX):
                actions.append(self._parse_update_file())
            elif line.startswith(_DELETE_PREFIX):
                actions.append(self._parse_delete_file())
            else:
                self.index += 1

        if not actions:
            raise InvalidPatchFormat("No file directive found in patch.")
        return actions

    def _take_filename(self, prefix: str) -> str:
        filename = _strip_prefix_repeatedly(self.lines[self.index], prefix).strip()
        self.index += 1
        return filename

    def _body_lines(self):
        """Yield lines up to the next line beginning with '*** '."""
        while self.index < len(self.lines) and not self.lines[self.index].startswith("*** "):
            yield self.lines[self.index]
            self.index += 1

    def _parse_add_file(self) -> PatchAction:
        filename = self._take_filename(_ADD_PREFIX)
        ins_lines = [line[1:] for line in self._body_lines() if line.startswith("+")]
        chunk = Chunk(
            orig_index=0,
            lines=[(LineType.INSERTION, content) for content in ins_lines],
            del_lines=[],
            ins_lines=list(ins_lines),
        )
        return PatchAction(type=ActionType.ADD, path=filename, chunks=[chunk])

    def _parse_update_file(self) -> PatchAction:
        filename = self._take_filename(_UPDATE_PREFIX)
        chunks: List[Chunk] = []
        new_path: Optional[str] = None
        current = Chunk()

        while self.index < len(self.lines) and not self.lines[self.index].startswith(END_MARKER):
            line = self.lines[self.index]
            if line.startswith(_DIRECTIVE_STARTS):
                break
            self.index += 1

            if line.startswith(_MOVE_PREFIX):
                new_path = _strip_prefix_repeatedly(line, _MOVE_PREFIX).strip()
                continue
            if line.startswith("@@"):
                if current.lines:
                    chunks.append(current)
                current = Chunk()
                continue

            line_type = _LINE_MARKERS.get(line[:1])
            if line_type is not None:
                current.lines.append((line_type, line[1:]))

        if current.lines:
            chunks.append(current)

        return PatchAction(
            type=ActionType.UPDATE, path=filename, new_path=new_path, chunks=chunks
        )

    def _parse_delete_file(self) -> PatchAction:
        filename = self._take_filename(_DELETE_PREFIX)
        lines = [
            (LineType.DELETION, line[1:])
            for line in self._body_lines()
            if line.startswith("-")
        ]
        chunks = [Chunk(orig_index=0, lines=lines)] if lines else []
        return PatchAction(type=ActionType.DELETE, path=filename, chunks=chunks)


def text_to_patch(text: str) -> List[PatchAction]:
    """Parse patch text into a list of file actions.

    The text must start with the begin marker and end with the end marker;
    surrounding whitespace is ignored.
    """
    trimmed = text.strip()
    lines = split_lines(trimmed)

    if len(lines) < 2:
        raise InvalidPatchFormat(
            "Patch text is too short (must include start and end markers)."
        )
    if lines[0] != BEGIN_MARKER:
        raise InvalidPatchFormat(f"Patch must start with '{BEGIN_MARKER}'")
    if lines[-1] != END_MARKER:
        raise InvalidPatchFormat(f"Patch must end with '{END_MARKER}'")

    actions = Parser(trimmed).parse()

    for action in actions:
        for chunk in action.chunks:
            chunk.del_lines = [c for t, c in chunk.lines if t is LineType.DELETION]
            chunk.ins_lines = [c for t, c in chunk.lines if t is LineType.INSERTION]

    return actions