"""Apply context-based text patches to an in-memory mapping of files."""

__version__ = "0.1.0"
__all__ = ["apply", "errors", "models", "parser", "patcher"]