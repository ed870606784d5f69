# zenpatch

zenpatch applies text patches to an in-memory set of files. A patch can add,
update, rename and delete files. Chunks are placed by their context lines, not
by line numbers, so a patch still applies when the line numbers around it have
shifted.

## Installation

```
pip install zenpatch
```

## The patch format

```
*** Begin Patch
*** Add File: new.txt
+hello
+world
*** Update File: a.txt
*** Move to: b.txt
@@
 unchanged context line
-line to remove
+line to add
*** Delete File: old.txt
-every line
-of the old file
*** End Patch
```

- A patch must start with `*** Begin Patch` and end with `*** End Patch`.
  Whitespace before and after the patch text is ignored.
- `*** Add File:` creates a file from its `+` lines. It fails if the file
  already exists.
- `*** Update File:` changes a file. Each `@@` line starts a new chunk. In a
  chunk, lines that start with a space are context, `-` lines are removed and
  `+` lines are inserted. The optional `*** Move to:` line renames the file.
- `*** Delete File:` removes a file. Its `-` lines must match the whole
  current content of the file. A delete with no `-` lines only succeeds on an
  empty file.

## Usage

The set of files is a plain `dict` that maps paths to contents. `apply` does
not change the mapping it is given. It returns a new `dict`.

```python
from zenpatch.apply import apply
from zenpatch.errors import PatchConflict, AmbiguousPatch

files = {"a.txt": "foo\nbar\nbaz\nqux"}
patch = """*** Begin Patch
*** Update File: a.txt
@@
 foo
-bar
+BAR
@@
 baz
-qux
+QUX
*** End Patch"""

result = apply(patch, files)
assert result["a.txt"] == "foo\nBAR\nbaz\nQUX"
```

The lines of an updated or added file are joined with `\n`, so CRLF line
endings become LF and a trailing newline is not kept.

## Matching

The chunks of an update are placed by a backtracking search. The search looks
for a set of positions where the deleted lines of no two chunks overlap, and
fails if it finds none or finds several that give different results. Matching
is exact at first. If that gives a conflict or an ambiguity, the search runs
again with surrounding whitespace trimmed and inner runs of whitespace
collapsed to one space.

The lower-level pieces can be used directly:

- `zenpatch.parser.text_to_patch(text)` returns a list of
  `zenpatch.models.PatchAction` objects, each with a `type`
  (`ActionType.ADD`, `UPDATE` or `DELETE`), a `path`, an optional `new_path`
  and a list of `Chunk` objects.
- `zenpatch.parser.Parser(text).parse()` does the same without checking the
  begin and end markers and without filling each chunk's `del_lines` and
  `ins_lines`.
- `zenpatch.patcher.apply_patch_backtracking(lines, chunks, mode)` applies
  chunks to a list of lines and returns the new list. `mode` is a
  `WhitespaceMode` (`STRICT`, the default, `LENIENT` or `SUPER_LENIENT`;
  the last also treats typographic dashes, quotes and spaces as plain ones).
- `zenpatch.patcher.match_line(a, b, mode)` compares two lines under a mode.

## Errors

Every failure raises a subclass of `zenpatch.errors.ZenpatchError`:

- `InvalidPatchFormat`: the patch is malformed or holds no file directive.
- `FileNotFound`: a patch updates or deletes a file that is not there.
- `FileExists`: a patch adds a file that already exists.
- `PatchConflict`: the chunks could not be placed, or a delete did not match
  the file's content.
- `AmbiguousPatch`: the chunks fit in more than one way. Add more context
  lines to fix it.

## What it does not do

zenpatch works only on the in-memory mapping it is given. It has no command
line tool and does not read or write files on disk; loading files into the
mapping and saving the result is left to the caller.