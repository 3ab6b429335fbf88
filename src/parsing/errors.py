"""Structured parsing errors for the scraping pipeline."""

from __future__ import annotations
from typing import Any


class ParsingError(Exception):
    """Base class for parsing related issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class MissingSectionError(ParsingError):
    """Raised when an expected marker, link or section is absent from a page."""


class RankLineMismatchError(ParsingError):
    """Raised when a candidate ranking block does not match the league's line pattern."""
