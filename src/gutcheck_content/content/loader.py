"""Bundled JSON content used when the CMS has nothing for an identity."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from gutcheck_content.errors import UnknownLevelIdError
from gutcheck_content.models.identity import ContentKey, ContentType

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

BUNDLED_FILES: dict[tuple[ContentType, str, str], str] = {
    (ContentType.QUESTION_SET, "gut-check", "2"): "gut-check/questions_v2.json",
    (ContentType.RESULTS_PACK, "gut-check", "1"): "gut-check/results_v1.json",
    (ContentType.RESULTS_PACK, "gut-check", "2"): "gut-check/results_v2.json",
}

LEVEL_ID_PATTERN = re.compile(r"^level[1-4]$")


class FileContentLoader:
    """Loads documents from the fixed set of files shipped with the package.

    Files are re-read on every call. Absence is reported as ``None``; only
    an unmappable results pack level id raises.
    """

    def __init__(self, level_aliases: Mapping[str, str] | None = None, data_dir: Path = DATA_DIR) -> None:
        self._level_aliases = dict(level_aliases or {})
        self._data_dir = data_dir

    def normalize_level_id(self, level_id: str, version: str) -> str:
        """Map ``level_id`` to ``level1``..``level4``.

        Raises:
            UnknownLevelIdError: If the id is neither canonical nor aliased.
        """
        if LEVEL_ID_PATTERN.match(level_id):
            return level_id
        mapped = self._level_aliases.get(level_id)
        if mapped and LEVEL_ID_PATTERN.match(mapped):
            logger.debug("Mapped level id %s -> %s for results version %s", level_id, mapped, version)
            return mapped
        raise UnknownLevelIdError(level_id, version)

    def load(self, key: ContentKey) -> dict[str, Any] | None:
        if key.content_type == ContentType.RESULTS_PACK:
            return self._load_results_pack(key)
        return self._load_question_set(key)

    def _read(self, key: ContentKey) -> dict[str, Any] | None:
        relative = BUNDLED_FILES.get((key.content_type, key.assessment_type, key.version))
        if relative is None:
            logger.error(
                "No bundled %s for assessment type %s version %s",
                key.content_type,
                key.assessment_type,
                key.version,
            )
            return None

        with (self._data_dir / relative).open(encoding="utf-8") as f:
            data = json.load(f)

        if data.get("assessmentType") != key.assessment_type:
            logger.error(
                "Assessment type mismatch in %s: expected %s, got %s",
                relative,
                key.assessment_type,
                data.get("assessmentType"),
            )
            return None
        if str(data.get("version")) != key.version:
            logger.error("Version mismatch in %s: expected %s, got %s", relative, key.version, data.get("version"))
            return None
        return data

    def _load_question_set(self, key: ContentKey) -> dict[str, Any] | None:
        return self._read(key)

    def _load_results_pack(self, key: ContentKey) -> dict[str, Any] | None:
        level_id = self.normalize_level_id(key.level_id or "", key.version)
        data = self._read(key)
        if data is None:
            return None

        pack = data.get("packs", {}).get(level_id)
        if pack is None:
            logger.error("No bundled results pack for %s (requested as %s)", level_id, key.level_id)
            return None
        return pack
