"""Question set resolver."""

from __future__ import annotations

from typing import Any

from gutcheck_content.content.validation import QUESTION_SET_VERSION, parse_question_set
from gutcheck_content.models.documents import QuestionSetDocument
from gutcheck_content.models.identity import ContentKey, ContentType
from gutcheck_content.resolver.base import RevisionResolver


class QuestionSetResolver(RevisionResolver):
    content_type = ContentType.QUESTION_SET

    def accept(self, content: Any, key: ContentKey) -> QuestionSetDocument | None:
        if not isinstance(content, dict):
            return None
        if content.get("version") != QUESTION_SET_VERSION or content.get("assessmentType") != key.assessment_type:
            return None
        return parse_question_set(content, assessment_type=key.assessment_type)

    def parse(self, content: Any, key: ContentKey) -> QuestionSetDocument:
        return parse_question_set(content, assessment_type=key.assessment_type)
