"""Applying a multi-file patch to an in-memory file system."""

from __future__ import annotations

from typing import Dict, List, Mapping

from .errors import AmbiguousPatch, FileExists, FileNotFound, PatchConflict
from .models import ActionType, PatchAction, Vfs
from .parser import split_lines, text_to_patch
from .patcher import WhitespaceMode, apply_patch_backtracking


def _read(files: Mapping[str, str], path: str) -> str:
    try:
        return files[path]
    except KeyError:
        raise FileNotFound(path) from None


def _apply_update(files: Dict[str, str], action: PatchAction) -> None:
    original_lines = split_lines(_read(files, action.path))
    try:
        patched = apply_patch_backtracking(
            original_lines, action.chunks, WhitespaceMode.STRICT
        )
    except (PatchConflict, AmbiguousPatch):
        patched = apply_patch_backtracking(
            original_lines, action.chunks, WhitespaceMode.LENIENT
        )
    content = "\n".join(patched)

    if action.new_path is not None:
        del files[action.path]
        files[action.new_path] = content
    else:
        files[action.path] = content


def _apply_add(files: Dict[str, str], action: PatchAction) -> None:
    if action.path in files:
        raise FileExists(action.path)
    lines: List[str] = [line for chunk in action.chunks for line in chunk.ins_lines]
    files[action.path] = "\n".join(lines)


def _apply_delete(files: Dict[str, str], action: PatchAction) -> None:
    original_lines = split_lines(_read(files, action.path))
    to_delete = [line for chunk in action.chunks for line in chunk.del_lines]
    if to_delete != original_lines:
        raise PatchConflict("Content to delete does not match original content.")
    del files[action.path]


_HANDLERS = {
    ActionType.UPDATE: _apply_update,
    ActionType.ADD: _apply_add,
    ActionType.DELETE: _apply_delete,
}


def apply(patch_text: str, vfs: Mapping[str, str]) -> Vfs:
    """Apply a patch to a mapping of paths to contents and return the new mapping.

    The given mapping is left unchanged. Raises a ZenpatchError subclass if
    the patch cannot be parsed or applied.
    """
    files: Dict[str, str] = dict(vfs)
    for action in text_to_patch(patch_text):
        _HANDLERS[action.type](files, action)
    return files