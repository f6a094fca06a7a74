"""Authoring-time errors raised while reading a post"""

from typing import Optional


class MdpostError(ValueError):
    """Base class for content errors; carries the offending file and line when known."""

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.line = line

    def __str__(self) -> str:
        where = self.path or "<text>"
        if self.line is not None:
            where = f"{where}:{self.line}"
        return f"{where}: {self.message}"


class MalformedMetadata(MdpostError):
    """Front matter block is missing, unterminated, or not a YAML mapping."""


class BrokenCodeFence(MdpostError):
    """A fenced code block is never closed and swallows the rest of the document."""
