import copy

import pytest

from zenpatch.models import ActionType, Chunk, LineType, PatchAction


# ActionType

def test_action_type_variants_exist():
    assert ActionType("Add") is ActionType.ADD
    assert ActionType("Delete") is ActionType.DELETE
    assert ActionType("Update") is ActionType.UPDATE
    assert len(ActionType) == 3


def test_action_type_equality():
    add1 = ActionType("Add")
    add2 = ActionType["ADD"]
    delete = ActionType("Delete")
    assert add1 == add2
    assert add1 != delete
    assert add1.value == "Add"


def test_action_type_cloning():
    original = ActionType("Update")
    assert copy.copy(original) == original
    assert copy.deepcopy(original) is original
    assert copy.deepcopy(original).value == "Update"


def test_action_type_unknown_value():
    with pytest.raises(ValueError):
        ActionType("Rename")


# LineType

def test_line_type_variants():
    assert LineType("Context") is LineType.CONTEXT
    assert LineType("Deletion") is LineType.DELETION
    assert LineType("Insertion") is LineType.INSERTION
    assert len({LineType.CONTEXT, LineType.DELETION, LineType.INSERTION}) == 3


def test_line_type_copy_clone():
    context1 = LineType("Context")
    assert copy.copy(context1) == context1
    assert copy.deepcopy(context1) == context1
    assert copy.deepcopy(context1).value == "Context"


# Chunk

def test_chunk_creation_empty():
    chunk = Chunk()
    assert chunk.orig_index == 0
    assert chunk.lines == []
    assert chunk.del_lines == []
    assert chunk.ins_lines == []


def test_chunk_defaults_not_shared():
    a = Chunk()
    b = Chunk()
    a.lines.append((LineType.CONTEXT, "x"))
    a.del_lines.append("y")
    assert b.lines == []
    assert b.del_lines == []


def test_chunk_creation_with_data():
    lines_data = [
        (LineType.CONTEXT, "context line 1"),
        (LineType.DELETION, "line to delete"),
        (LineType.INSERTION, "new line 1"),
        (LineType.INSERTION, "new line 2"),
        (LineType.CONTEXT, "context line 2"),
    ]
    del_lines_data = ["line to delete"]
    ins_lines_data = ["new line 1", "new line 2"]

    chunk = Chunk(
        orig_index=10,
        lines=list(lines_data),
        del_lines=list(del_lines_data),
        ins_lines=list(ins_lines_data),
    )

    assert chunk.orig_index == 10
    assert len(chunk.lines) == 5
    assert chunk.lines == lines_data
    assert chunk.del_lines == del_lines_data
    assert chunk.ins_lines == ins_lines_data
    assert [lt for lt, _ in chunk.lines] == [
        LineType.CONTEXT,
        LineType.DELETION,
        LineType.INSERTION,
        LineType.INSERTION,
        LineType.CONTEXT,
    ]


def test_chunk_equality_and_clone():
    chunk1 = Chunk(orig_index=5, lines=[(LineType.CONTEXT, "a")])
    chunk2 = copy.deepcopy(chunk1)
    chunk3 = Chunk(orig_index=6, lines=[(LineType.CONTEXT, "a")])
    chunk4 = Chunk(orig_index=5, lines=[(LineType.DELETION, "a")], del_lines=["a"])

    assert chunk1 == chunk2
    assert chunk1 != chunk3
    assert chunk1 != chunk4


# PatchAction

def test_patch_action_add():
    action = PatchAction(type=ActionType.ADD, path="new/path/file.txt")
    assert action.type == ActionType.ADD
    assert action.path == "new/path/file.txt"
    assert action.chunks == []
    assert action.new_path is None


def test_patch_action_update():
    chunk = Chunk(
        orig_index=5,
        lines=[(LineType.DELETION, "old line"), (LineType.INSERTION, "new line")],
        del_lines=["old line"],
        ins_lines=["new line"],
    )
    action = PatchAction(type=ActionType.UPDATE, path="file.txt", chunks=[chunk])
    assert action.type == ActionType.UPDATE
    assert len(action.chunks) == 1
    assert action.chunks[0].del_lines == ["old line"]
    assert action.new_path is None


def test_patch_action_delete():
    action = PatchAction(type=ActionType.DELETE, path="file_to_delete.txt")
    assert action.type == ActionType.DELETE
    assert action.path == "file_to_delete.txt"
    assert action.chunks == []
    assert action.new_path is None


def test_patch_action_update_with_move():
    chunk = Chunk(
        orig_index=1,
        lines=[(LineType.INSERTION, "added line")],
        ins_lines=["added line"],
    )
    action = PatchAction(
        type=ActionType.UPDATE,
        path="old/location.txt",
        new_path="new/location.txt",
        chunks=[chunk],
    )
    assert action.type == ActionType.UPDATE
    assert action.path == "old/location.txt"
    assert action.new_path == "new/location.txt"
    assert len(action.chunks) == 1


def test_patch_action_clone_and_equality():
    action1 = PatchAction(
        type=ActionType.UPDATE,
        path="file.rs",
        chunks=[
            Chunk(
                orig_index=1,
                lines=[(LineType.INSERTION, "a")],
                ins_lines=["a"],
            )
        ],
    )
    action2 = copy.deepcopy(action1)
    action3 = PatchAction(type=ActionType.ADD, path="file.txt")

    assert action1 == action2
    assert action1 != action3


def test_patch_action_chunks_not_shared():
    a = PatchAction(type=ActionType.ADD, path="a.txt")
    b = PatchAction(type=ActionType.ADD, path="b.txt")
    a.chunks.append(Chunk())
    assert b.chunks == []
    assert len(a.chunks) == 1