"""CSV import — four CSV texts in, one draft question set revision out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gutcheck_content.content.csv_import import (
    DOCUMENT_FILE,
    META_FILE,
    META_HEADERS,
    OPTION_HEADERS,
    OPTIONS_FILE,
    QUESTION_HEADERS,
    QUESTIONS_FILE,
    SECTION_HEADERS,
    SECTIONS_FILE,
    CsvError,
    build_question_set_from_csv,
    parse_csv,
)
from gutcheck_content.errors import ContentValidationError
from gutcheck_content.models.identity import ContentKey, ContentType
from gutcheck_content.services.revisions import create_revision, ensure_identity

if TYPE_CHECKING:
    from gutcheck_content.database.store import ContentStore
    from gutcheck_content.models.identity import ContentIdentity
    from gutcheck_content.models.revision import Revision

logger = logging.getLogger(__name__)


@dataclass
class CsvImportResult:
    errors: list[CsvError] = field(default_factory=list)
    identity: ContentIdentity | None = None
    revision: Revision | None = None

    @property
    def ok(self) -> bool:
        return self.revision is not None and not self.errors


async def import_question_set_csv(
    meta: str,
    sections: str,
    questions: str,
    options: str,
    store: ContentStore,
    *,
    created_by: str | None = None,
) -> CsvImportResult:
    """Parse, build and store a question set from four CSV texts.

    Every file is parsed before any error is returned so the caller gets the
    complete list. The identity is taken from the meta file and created if
    it does not exist yet.
    """
    if store.content_type != ContentType.QUESTION_SET:
        raise ValueError("CSV import only supports question sets")

    result = CsvImportResult()
    parsed = {}
    for name, text, headers in (
        (META_FILE, meta, META_HEADERS),
        (SECTIONS_FILE, sections, SECTION_HEADERS),
        (QUESTIONS_FILE, questions, QUESTION_HEADERS),
        (OPTIONS_FILE, options, OPTION_HEADERS),
    ):
        rows, errors = parse_csv(text, name, headers)
        parsed[name] = rows
        result.errors.extend(errors)
    if result.errors:
        return result

    build = build_question_set_from_csv(
        parsed[META_FILE], parsed[SECTIONS_FILE], parsed[QUESTIONS_FILE], parsed[OPTIONS_FILE]
    )
    if not build.ok or build.document is None:
        result.errors.extend(build.errors)
        return result

    key = ContentKey.question_set(build.document["assessmentType"], build.assessment_version or "", build.locale)
    identity = await ensure_identity(key, store, updated_by=created_by)
    try:
        revision = await create_revision(
            identity.id,
            build.document,
            store,
            created_by=created_by,
            change_summary=build.notes or "CSV import",
        )
    except ContentValidationError as exc:
        result.errors.extend(CsvError(DOCUMENT_FILE, 0, message) for message in exc.errors)
        return result

    result.identity = identity
    result.revision = revision
    logger.info("CSV import stored — %s revision=%s", key.describe(), revision.id)
    return result
