"""Tests for the CSV import service."""

from unittest.mock import AsyncMock

import pytest

from gutcheck_content.content.csv_import import CsvError
from gutcheck_content.models.identity import ContentKey
from gutcheck_content.services.csv_import import import_question_set_csv

META = "key,value\nversion,2\nassessmentType,gut-check\nassessmentVersion,v3\nlocale,en-GB\nnotes,Spring refresh\n"
SECTIONS = "section_id,title,order\ndigestion,Digestion,1\n"
QUESTIONS = "question_id,section_id,text,order\nbloating,digestion,How often do you feel bloated?,1\n"
OPTIONS = (
    "question_id,option_id,label,value\n"
    "bloating,never,Never,0\n"
    "bloating,sometimes,Sometimes,1\n"
    "bloating,often,Often,2\n"
    "bloating,always,Always,3\n"
)


class TestImportQuestionSetCsv:
    """Test the CSV import service."""

    async def test_imports_new_identity_and_revision(self, question_store) -> None:
        """Verify a clean import scaffolds the identity and stores a draft revision."""
        result = await import_question_set_csv(META, SECTIONS, QUESTIONS, OPTIONS, question_store, created_by="ed")

        assert result.ok
        assert result.errors == []
        assert result.identity.assessment_type == "gut-check"
        assert result.identity.version == "3"
        assert result.identity.locale == "en-GB"
        assert result.revision.identity_id == result.identity.id
        assert result.revision.change_summary == "Spring refresh"
        assert result.revision.created_by == "ed"
        assert result.revision.content_json["questions"][0]["options"][3]["id"] == "always"
        question_store.revisions.create.assert_awaited_once()

    async def test_reuses_existing_identity(self, question_store, make_identity) -> None:
        """Verify an existing identity gets the next revision."""
        identity = make_identity(ContentKey.question_set("gut-check", 3, "en-GB"))
        question_store.identities.find = AsyncMock(return_value=identity)
        question_store.identities.get = AsyncMock(return_value=identity)

        result = await import_question_set_csv(META, SECTIONS, QUESTIONS, OPTIONS, question_store)

        assert result.identity is identity
        question_store.identities.create.assert_not_awaited()

    async def test_default_change_summary(self, question_store) -> None:
        """Verify imports without notes get a default summary."""
        meta = "key,value\nversion,2\nassessmentType,gut-check\nassessmentVersion,2\n"

        result = await import_question_set_csv(meta, SECTIONS, QUESTIONS, OPTIONS, question_store)

        assert result.revision.change_summary == "CSV import"

    async def test_collects_parse_errors_from_every_file(self, question_store) -> None:
        """Verify every file is parsed before reporting and nothing is written."""
        sections = "section,title,order\ndigestion,Digestion,1\n"

        result = await import_question_set_csv(META, sections, QUESTIONS, "", question_store)

        assert not result.ok
        assert result.errors == [
            CsvError("sections.csv", 1, 'Header mismatch: expected "section_id", got "section"', column="section_id"),
            CsvError("options.csv", 0, "CSV file is empty"),
        ]
        question_store.identities.find.assert_not_awaited()

    async def test_build_errors_stop_before_writing(self, question_store) -> None:
        """Verify cross-file problems are returned without creating anything."""
        options = OPTIONS.replace("bloating,always,Always,3\n", "")

        result = await import_question_set_csv(META, SECTIONS, QUESTIONS, options, question_store)

        assert result.errors == [
            CsvError("options.csv", 2, 'Question "bloating" must have exactly 4 options, got 3', "question_id"),
            CsvError("options.csv", 2, 'Question "bloating" is missing option with value 3', "value"),
        ]
        question_store.identities.create.assert_not_awaited()
        question_store.revisions.create.assert_not_awaited()

    async def test_rejects_results_pack_store(self, pack_store) -> None:
        """Verify CSV import is limited to question sets."""
        with pytest.raises(ValueError, match="only supports question sets"):
            await import_question_set_csv(META, SECTIONS, QUESTIONS, OPTIONS, pack_store)
