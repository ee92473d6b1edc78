"""Typed content documents.

Stored and bundled content is camelCase JSON. These models are only built
from JSON that already passed ``content.validation``; unknown keys are kept
so that optional presentation fields survive a round trip.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ContentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_json(self) -> dict[str, Any]:
        """Dump back to the camelCase wire shape.

        Keys present in the source JSON are kept, explicit nulls included, so
        the served document hashes to the stored ``content_hash``.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# --- question sets ---------------------------------------------------------


class QuestionOption(ContentModel):
    id: str
    label: str
    value: int


class Question(ContentModel):
    id: str
    text: str
    options: list[QuestionOption]


class Section(ContentModel):
    id: str
    title: str
    question_ids: list[str]


class QuestionSetDocument(ContentModel):
    version: Literal["2"]
    assessment_type: str
    sections: list[Section]
    questions: list[Question]


# --- results packs ---------------------------------------------------------


class FlowPage1(ContentModel):
    headline: str
    body: list[str]
    snapshot_title: str | None = None
    snapshot_bullets: list[str]
    meaning_title: str | None = None
    meaning_body: str


class FlowPage2(ContentModel):
    headline: str
    step_bullets: list[str]
    video_cta_label: str
    video_asset_url: str


class FlowPage3(ContentModel):
    problem_headline: str
    problem_body: list[str]
    try_title: str
    try_bullets: list[str]
    try_closer: str
    mechanism_title: str
    mechanism_body_top: str
    mechanism_pills: list[str]
    mechanism_body_bottom: str
    method_title: str
    method_body: list[str]
    method_learn_title: str | None = None
    method_learn_bullets: list[str]
    method_cta_label: str
    method_cta_url: str | None = None
    method_email_link_label: str


class Flow(ContentModel):
    page1: FlowPage1
    page2: FlowPage2
    page3: FlowPage3


class ResultsPackFlowDocument(ContentModel):
    """Three-page Flow v2 results pack."""

    shape: Literal["flow_v2"] = "flow_v2"
    label: str
    flow: Flow

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude={"shape"})


class ResultsPackLegacyDocument(ContentModel):
    """Pre-flow results pack; any incomplete ``flow`` is carried as raw extra data."""

    shape: Literal["legacy"] = "legacy"
    label: str
    summary: str
    key_patterns: list[str]
    first_focus_areas: list[str]
    method_positioning: str

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude={"shape"})


ResultsPackDocument = ResultsPackFlowDocument | ResultsPackLegacyDocument
ContentDocument = QuestionSetDocument | ResultsPackFlowDocument | ResultsPackLegacyDocument
