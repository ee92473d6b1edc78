"""CMS-first content resolution with bundled file fallback."""

from gutcheck_content.resolver.attempt import attempt
from gutcheck_content.resolver.base import RevisionResolver
from gutcheck_content.resolver.questions import QuestionSetResolver
from gutcheck_content.resolver.results import ResultsPackResolver

__all__ = [
    "QuestionSetResolver",
    "ResultsPackResolver",
    "RevisionResolver",
    "attempt",
]
