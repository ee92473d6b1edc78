"""Structural validation for question sets and results packs.

``validate_*`` never raise: they walk the whole document and collect every
violation so that import feedback can list all problems at once.
``parse_*`` are the only way untyped JSON becomes a typed content document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from gutcheck_content.content.video import parse_youtube
from gutcheck_content.errors import InvalidContentError
from gutcheck_content.models.documents import (
    QuestionSetDocument,
    ResultsPackDocument,
    ResultsPackFlowDocument,
    ResultsPackLegacyDocument,
)

logger = logging.getLogger(__name__)

QUESTION_SET_VERSION = "2"
OPTION_VALUES = (0, 1, 2, 3)

SHAPE_FLOW = "flow_v2"
SHAPE_LEGACY = "legacy"

_LEGACY_FIELDS = ("summary", "keyPatterns", "firstFocusAreas", "methodPositioning")


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    normalized: dict[str, Any] | None = None
    shape: str | None = None

    @property
    def ok(self) -> bool:
        return not self.errors


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# --- question sets ---------------------------------------------------------


def validate_question_set(content: Any, *, assessment_type: str | None = None) -> ValidationResult:
    """Check a question set document against the v2 schema.

    When ``assessment_type`` is given the document must declare exactly that
    type; otherwise any non-empty ``assessmentType`` is accepted.
    """
    result = ValidationResult()
    errors = result.errors

    if not isinstance(content, dict):
        errors.append("Question set JSON must be an object.")
        return result

    if content.get("version") != QUESTION_SET_VERSION:
        errors.append(f'version must be "{QUESTION_SET_VERSION}", got "{content.get("version")}".')

    declared_type = content.get("assessmentType")
    if assessment_type is not None:
        if declared_type != assessment_type:
            errors.append(f'assessmentType must be "{assessment_type}", got "{declared_type}".')
    elif not _is_text(declared_type):
        errors.append("assessmentType must be a non-empty string.")

    sections = content.get("sections")
    if not isinstance(sections, list):
        errors.append("sections must be an array.")
        return result
    if not sections:
        errors.append("sections array must be non-empty.")

    referenced: list[str] = []
    section_ids: set[str] = set()
    for i, section in enumerate(sections):
        if not isinstance(section, dict):
            errors.append(f"sections[{i}] must be an object.")
            continue

        section_id = section.get("id")
        if not _is_text(section_id):
            errors.append(f"sections[{i}].id must be a non-empty string.")
        else:
            if section_id in section_ids:
                errors.append(f'sections[{i}].id "{section_id}" is duplicate.')
            section_ids.add(section_id)

        if not _is_text(section.get("title")):
            errors.append(f"sections[{i}].title must be a non-empty string.")

        question_ids = section.get("questionIds")
        if not isinstance(question_ids, list):
            errors.append(f"sections[{i}].questionIds must be an array.")
        elif not question_ids:
            errors.append(f"sections[{i}].questionIds must be non-empty.")
        else:
            referenced.extend(qid for qid in question_ids if isinstance(qid, str))

    questions = content.get("questions")
    if not isinstance(questions, list):
        errors.append("questions must be an array.")
        return result
    if not questions:
        errors.append("questions array must be non-empty.")

    question_ids_seen: set[str] = set()
    for i, question in enumerate(questions):
        if not isinstance(question, dict):
            errors.append(f"questions[{i}] must be an object.")
            continue

        question_id = question.get("id")
        if not _is_text(question_id):
            errors.append(f"questions[{i}].id must be a non-empty string.")
        else:
            if question_id in question_ids_seen:
                errors.append(f'questions[{i}].id "{question_id}" is duplicate.')
            question_ids_seen.add(question_id)

        if not _is_text(question.get("text")):
            errors.append(f"questions[{i}].text must be a non-empty string.")

        _validate_options(question.get("options"), f"questions[{i}]", errors)

    for question_id in dict.fromkeys(referenced):
        if question_id not in question_ids_seen:
            errors.append(f'Section references question.id "{question_id}" which does not exist.')

    if result.ok:
        result.normalized = content
    return result


def _validate_options(options: Any, path: str, errors: list[str]) -> None:
    if not isinstance(options, list):
        errors.append(f"{path}.options must be an array.")
        return
    if len(options) != len(OPTION_VALUES):
        errors.append(f"{path}.options must have exactly {len(OPTION_VALUES)} options, got {len(options)}.")

    option_ids: set[str] = set()
    values: set[int] = set()
    for j, option in enumerate(options):
        option_path = f"{path}.options[{j}]"
        if not isinstance(option, dict):
            errors.append(f"{option_path} must be an object.")
            continue

        option_id = option.get("id")
        if not _is_text(option_id):
            errors.append(f"{option_path}.id must be a non-empty string.")
        else:
            if option_id in option_ids:
                errors.append(f'{option_path}.id "{option_id}" is duplicate within question.')
            option_ids.add(option_id)

        if not _is_text(option.get("label")):
            errors.append(f"{option_path}.label must be a non-empty string.")

        value = option.get("value")
        if not _is_int(value):
            errors.append(f"{option_path}.value must be an integer.")
        elif value not in OPTION_VALUES:
            errors.append(f"{option_path}.value must be one of {{0,1,2,3}}, got {value}.")
        else:
            if value in values:
                errors.append(f"{option_path}.value {value} is duplicate within question.")
            values.add(value)

    for expected in OPTION_VALUES:
        if expected not in values:
            errors.append(f"{path} is missing option with value {expected}.")


# --- results packs ---------------------------------------------------------

_PAGE_TEXT = {
    "page1": ("headline", "meaningBody"),
    "page2": ("headline", "videoCtaLabel"),
    "page3": (
        "problemHeadline",
        "tryTitle",
        "tryCloser",
        "mechanismTitle",
        "mechanismBodyTop",
        "mechanismBodyBottom",
        "methodTitle",
        "methodCtaLabel",
        "methodEmailLinkLabel",
    ),
}
# (field, exact item count); None means any non-empty list
_PAGE_LISTS = {
    "page1": (("body", None), ("snapshotBullets", 3)),
    "page2": (("stepBullets", 3),),
    "page3": (
        ("problemBody", None),
        ("tryBullets", 3),
        ("mechanismPills", 4),
        ("methodBody", None),
        ("methodLearnBullets", 3),
    ),
}
_PAGE_OPTIONAL_TEXT = {
    "page1": ("snapshotTitle", "meaningTitle"),
    "page2": (),
    "page3": ("methodLearnTitle", "methodCtaUrl"),
}


def _field_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _check_text(obj: dict[str, Any], key: str, path: str, errors: list[str]) -> None:
    if not _is_text(obj.get(key)):
        errors.append(f"{_field_path(path, key)} must be a non-empty string.")


def _check_list(obj: dict[str, Any], key: str, path: str, count: int | None, errors: list[str]) -> None:
    name = _field_path(path, key)
    value = obj.get(key)
    if not isinstance(value, list):
        errors.append(f"{name} must be an array.")
        return
    if count is not None and len(value) != count:
        errors.append(f"{name} must have exactly {count} items, got {len(value)}.")
    elif count is None and not value:
        errors.append(f"{name} must be non-empty.")
    for k, item in enumerate(value):
        if not _is_text(item):
            errors.append(f"{name}[{k}] must be a non-empty string.")


def _flow_errors(flow: Any) -> list[str]:
    errors: list[str] = []
    if flow is None:
        return ["Missing flow."]
    if not isinstance(flow, dict):
        return ["flow must be an object."]

    for page_name in ("page1", "page2", "page3"):
        page = flow.get(page_name)
        path = f"flow.{page_name}"
        if page is None:
            errors.append(f"Missing {path}.")
            continue
        if not isinstance(page, dict):
            errors.append(f"{path} must be an object.")
            continue
        for key in _PAGE_TEXT[page_name]:
            _check_text(page, key, path, errors)
        for key, count in _PAGE_LISTS[page_name]:
            _check_list(page, key, path, count, errors)
        for key in _PAGE_OPTIONAL_TEXT[page_name]:
            if page.get(key) is not None and not isinstance(page[key], str):
                errors.append(f"{path}.{key} must be a string when present.")
        if page_name == "page2":
            _check_video(page.get("videoAssetUrl"), f"{path}.videoAssetUrl", errors)
    return errors


def _check_video(value: Any, path: str, errors: list[str]) -> None:
    if value is None or value == "":
        errors.append(f"{path} is required.")
    elif parse_youtube(value) is None:
        errors.append(f'{path} "{value}" is not a recognisable YouTube URL or video id.')


def _legacy_errors(content: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    for key in ("summary", "methodPositioning"):
        _check_text(content, key, "", errors)
    for key in ("keyPatterns", "firstFocusAreas"):
        _check_list(content, key, "", None, errors)
    return errors


def validate_results_pack(content: Any) -> ValidationResult:
    """Check a results pack as Flow v2, falling back to the legacy shape.

    A well-formed ``flow`` wins. An incomplete ``flow`` next to valid legacy
    fields is accepted as legacy with a warning.
    """
    result = ValidationResult()

    if not isinstance(content, dict):
        result.errors.append("Pack JSON must be an object.")
        return result

    if not _is_text(content.get("label")):
        result.errors.append("label must be a non-empty string.")

    flow_errors = _flow_errors(content.get("flow"))
    if not flow_errors:
        result.shape = SHAPE_FLOW
    else:
        legacy_errors = _legacy_errors(content)
        if not legacy_errors:
            result.shape = SHAPE_LEGACY
            if "flow" in content:
                result.warnings.append(
                    f"flow is incomplete ({len(flow_errors)} problem(s), first: {flow_errors[0]}); "
                    "serving legacy fields."
                )
        else:
            result.errors.extend(flow_errors)
            if any(key in content for key in _LEGACY_FIELDS):
                result.errors.extend(legacy_errors)

    if result.ok:
        result.normalized = content
    return result


# --- typed boundary --------------------------------------------------------


def _pydantic_errors(exc: ValidationError) -> list[str]:
    return [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]


def parse_question_set(content: Any, *, assessment_type: str | None = None) -> QuestionSetDocument:
    """Validate and convert raw JSON into a ``QuestionSetDocument``.

    Raises:
        InvalidContentError: If validation reports any error.
    """
    result = validate_question_set(content, assessment_type=assessment_type)
    if not result.ok:
        raise InvalidContentError(f"Invalid question set: {result.errors[0]}", result.errors)
    try:
        return QuestionSetDocument.model_validate(content)
    except ValidationError as exc:
        errors = _pydantic_errors(exc)
        raise InvalidContentError(f"Invalid question set: {errors[0]}", errors) from exc


def parse_results_pack(content: Any) -> ResultsPackDocument:
    """Validate and convert raw JSON into the Flow v2 or legacy results pack.

    Raises:
        InvalidContentError: If validation reports any error.
    """
    result = validate_results_pack(content)
    if not result.ok:
        raise InvalidContentError(f"Invalid results pack: {result.errors[0]}", result.errors)
    for warning in result.warnings:
        logger.warning("Results pack %r: %s", content.get("label"), warning)

    model = ResultsPackFlowDocument if result.shape == SHAPE_FLOW else ResultsPackLegacyDocument
    try:
        return model.model_validate(content)
    except ValidationError as exc:
        errors = _pydantic_errors(exc)
        raise InvalidContentError(f"Invalid results pack: {errors[0]}", errors) from exc
