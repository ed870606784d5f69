"""Exceptions raised while parsing or applying patches."""

from __future__ import annotations


class ZenpatchError(Exception):
    """Base class for every error the package raises."""

    prefix = "Zenpatch error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"


class InvalidPatchFormat(ZenpatchError):
    """The patch text is not in the expected format."""

    prefix = "Invalid patch format"


class FileNotFound(ZenpatchError):
    """A file the patch refers to does not exist."""

    prefix = "File not found"

    @property
    def path(self) -> str:
        return self.detail


class DuplicatePath(ZenpatchError):
    """The same path appears more than once in a patch."""

    prefix = "Duplicate path in patch"

    @property
    def path(self) -> str:
        return self.detail


class MissingFile(ZenpatchError):
    """A file mentioned in the patch is missing."""

    prefix = "Missing file mentioned in patch"

    @property
    def path(self) -> str:
        return self.detail


class FileExists(ZenpatchError):
    """A file the patch would add already exists."""

    prefix = "File already exists"

    @property
    def path(self) -> str:
        return self.detail


class InvalidLine(ZenpatchError):
    """A line in the patch could not be understood."""

    prefix = "Invalid line in patch"


class InvalidContext(ZenpatchError):
    """Context lines did not match at the given index."""

    prefix = "Invalid context"

    def __init__(self, index: int, context: str) -> None:
        super().__init__(context)
        self.index = index
        self.context = context

    def __str__(self) -> str:
        return f"{self.prefix} at index {self.index}: {self.context}"


class InvalidEOFContext(ZenpatchError):
    """End-of-file context did not match at the given index."""

    prefix = "Invalid end-of-file context"

    def __init__(self, index: int, context: str) -> None:
        super().__init__(context)
        self.index = index
        self.context = context

    def __str__(self) -> str:
        return f"{self.prefix} at index {self.index}: {self.context}"


class IndexOutOfBounds(ZenpatchError):
    """An index fell outside the content it refers to."""

    prefix = "Index out of bounds"


class PatchIOError(ZenpatchError):
    """An input or output operation failed."""

    prefix = "I/O error"


class PatchConflict(ZenpatchError):
    """The patch conflicts with the file content."""

    prefix = "Patch conflict"


class ContextNotFound(ZenpatchError):
    """The patch's context lines were not found in the file."""

    prefix = "Context not found"


class AmbiguousPatch(ZenpatchError):
    """The patch can be applied in more than one distinct way."""

    prefix = "Ambiguous patch"


class PatchApplicationFailed(ZenpatchError):
    """Applying the patch failed for another reason."""

    prefix = "Patch application"