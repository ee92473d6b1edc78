"""Results pack resolver.

Packs carry no embedded identity fields, so a stored pack is accepted when
it is an object with a label. Anything else is treated as a miss.
"""

from __future__ import annotations

from typing import Any

from gutcheck_content.content.validation import parse_results_pack
from gutcheck_content.models.documents import ResultsPackDocument
from gutcheck_content.models.identity import ContentKey, ContentType
from gutcheck_content.resolver.base import RevisionResolver


class ResultsPackResolver(RevisionResolver):
    content_type = ContentType.RESULTS_PACK

    def accept(self, content: Any, key: ContentKey) -> ResultsPackDocument | None:
        if not isinstance(content, dict) or not isinstance(content.get("label"), str) or not content["label"]:
            return None
        return parse_results_pack(content)

    def parse(self, content: Any, key: ContentKey) -> ResultsPackDocument:
        return parse_results_pack(content)
