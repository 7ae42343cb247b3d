"""Domain relevance classification."""

from chartgen.services.relevance.classifier import RelevanceClassifier
from chartgen.services.relevance.models import RelevanceVerdict

__all__ = ["RelevanceClassifier", "RelevanceVerdict"]
