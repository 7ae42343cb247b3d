"""Relevance service models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RelevanceVerdict:
    """Result from relevance classification."""

    relevant: bool
    reason: str | None = None
