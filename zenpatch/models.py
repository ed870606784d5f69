"""Data structures describing parsed patches and the in-memory file system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

Vfs = Dict[str, str]
"""An in-memory file system mapping paths to file contents."""


class ActionType(Enum):
    """The kind of file operation a patch action performs."""

    ADD = "Add"
    DELETE = "Delete"
    UPDATE = "Update"


class LineType(Enum):
    """The role of a line within a patch hunk."""

    CONTEXT = "Context"
    DELETION = "Deletion"
    INSERTION = "Insertion"


@dataclass
class Chunk:
    """A contiguous block of context, deleted and inserted lines."""

    orig_index: int = 0
    lines: List[Tuple[LineType, str]] = field(default_factory=list)
    del_lines: List[str] = field(default_factory=list)
    ins_lines: List[str] = field(default_factory=list)


@dataclass
class PatchAction:
    """A single file operation described by a patch."""

    type: ActionType
    path: str
    new_path: Optional[str] = None
    chunks: List[Chunk] = field(default_factory=list)