"""Errors raised by the rename pipeline."""
from __future__ import annotations


class RenamerError(Exception):
    """Base exception for all rename pipeline errors."""

    stage = "pipeline"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class InvalidArchiveError(RenamerError):
    """Raised when input bytes cannot be decoded as a ZIP archive."""

    stage = "read"

    def __init__(self, message: str, label: str | None = None) -> None:
        super().__init__(message, stage=f"read-{label}" if label else None)
        self.label = label


class ContentReadError(RenamerError):
    """Raised when an entry's content cannot be materialised."""

    stage = "resolve"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class EncodeError(RenamerError):
    """Raised when the output archive cannot be assembled."""

    stage = "encode"
