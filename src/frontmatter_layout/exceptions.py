"""Exceptions raised while rewriting document frontmatter."""

from __future__ import annotations


class FrontmatterError(ValueError):
    """Base exception for frontmatter that cannot be processed."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class ParseError(FrontmatterError):
    """Raised when a frontmatter block is not well-formed YAML."""

    def __init__(self, reason: Exception, source: str | None = None) -> None:
        self.reason = reason
        super().__init__(f"Invalid YAML frontmatter: {reason}", source)


class StructuralError(FrontmatterError):
    """Raised when the frontmatter YAML root is not a mapping."""

    def __init__(self, found: str, source: str | None = None) -> None:
        self.found = found
        super().__init__(f"Frontmatter must be a YAML mapping, got {found}", source)
