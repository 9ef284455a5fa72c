"""Custom exceptions for textbayes."""

from __future__ import annotations


class TextBayesError(Exception):
    """Base exception for all textbayes errors."""
    pass


class StateCorruptedError(TextBayesError, ValueError):
    """Raised when exported classifier state cannot be imported.

    Covers payloads that do not parse as a JSON object and payloads missing
    the mandatory ``totalDocuments`` or ``vocabulary`` fields.
    """

    def __init__(self, message: str = "Classifier state is corrupted.") -> None:
        super().__init__(message)
