"""Tests for the bundled file loader."""

import json

import pytest

from gutcheck_content.content.loader import FileContentLoader
from gutcheck_content.content.validation import validate_question_set, validate_results_pack
from gutcheck_content.errors import UnknownLevelIdError
from gutcheck_content.models.identity import ContentKey


class TestFileContentLoader:
    """Test the File Content Loader."""

    @pytest.fixture
    def loader(self) -> FileContentLoader:
        """Create a loader with one configured alias."""
        return FileContentLoader({"struggling": "level4"})

    def test_loads_bundled_question_set(self, loader: FileContentLoader) -> None:
        """Verify the bundled v2 question set loads and validates."""
        content = loader.load(ContentKey.question_set("gut-check", "v2"))
        assert content is not None
        assert validate_question_set(content, assessment_type="gut-check").ok

    def test_locale_is_ignored(self, loader: FileContentLoader) -> None:
        """Verify a localized key still gets the single bundled file."""
        assert loader.load(ContentKey.question_set("gut-check", 2, "fr-FR")) is not None

    def test_unknown_question_set_version(self, loader: FileContentLoader) -> None:
        """Verify an unbundled version is a miss."""
        assert loader.load(ContentKey.question_set("gut-check", 3)) is None

    def test_unknown_assessment_type(self, loader: FileContentLoader) -> None:
        """Verify an unbundled assessment type is a miss."""
        assert loader.load(ContentKey.question_set("sleep-check", 2)) is None

    @pytest.mark.parametrize("version", ["1", "2"])
    @pytest.mark.parametrize("level", ["level1", "level2", "level3", "level4"])
    def test_every_bundled_pack_validates(self, loader: FileContentLoader, version: str, level: str) -> None:
        """Verify each bundled pack for each version is valid."""
        pack = loader.load(ContentKey.results_pack("gut-check", version, level))
        assert pack is not None
        assert validate_results_pack(pack).ok

    def test_alias_maps_to_canonical_level(self, loader: FileContentLoader) -> None:
        """Verify a configured alias loads the canonical pack."""
        aliased = loader.load(ContentKey.results_pack("gut-check", 2, "struggling"))
        canonical = loader.load(ContentKey.results_pack("gut-check", 2, "level4"))
        assert aliased == canonical

    def test_unknown_level_raises(self, loader: FileContentLoader) -> None:
        """Verify an unmappable level id raises rather than missing."""
        with pytest.raises(UnknownLevelIdError, match='levelId "level9"'):
            loader.load(ContentKey.results_pack("gut-check", 2, "level9"))

    def test_alias_to_non_canonical_level_raises(self) -> None:
        """Verify an alias must map onto level1..level4."""
        loader = FileContentLoader({"odd": "level7"})
        with pytest.raises(UnknownLevelIdError):
            loader.normalize_level_id("odd", "2")

    def test_unknown_results_version(self, loader: FileContentLoader) -> None:
        """Verify an unbundled results version is a miss."""
        assert loader.load(ContentKey.results_pack("gut-check", 5, "level1")) is None

    def test_version_mismatch_in_file(self, tmp_path) -> None:
        """Verify a bundled file declaring a different version is a miss."""
        (tmp_path / "gut-check").mkdir()
        (tmp_path / "gut-check" / "questions_v2.json").write_text(
            json.dumps({"version": "1", "assessmentType": "gut-check"}), encoding="utf-8"
        )
        loader = FileContentLoader(data_dir=tmp_path)
        assert loader.load(ContentKey.question_set("gut-check", 2)) is None

    def test_missing_level_in_file(self, tmp_path) -> None:
        """Verify a file without the requested level is a miss."""
        (tmp_path / "gut-check").mkdir()
        (tmp_path / "gut-check" / "results_v2.json").write_text(
            json.dumps({"version": "2", "assessmentType": "gut-check", "packs": {}}), encoding="utf-8"
        )
        loader = FileContentLoader(data_dir=tmp_path)
        assert loader.load(ContentKey.results_pack("gut-check", 2, "level1")) is None
