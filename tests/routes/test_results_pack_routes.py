"""Tests for the results pack resolve route."""

from unittest.mock import AsyncMock, patch

import pytest

from gutcheck_content.models.identity import ContentKey
from gutcheck_content.models.pointer import Pointer

URL = "/api/results-packs/resolve"


def _params(version: str, level_id: str, assessment_type: str = "gut-check") -> dict[str, str]:
    return {"assessmentType": assessment_type, "resultsVersion": version, "levelId": level_id}


class TestResolveResultsPackRoute:
    """Test the Resolve Results Pack Route."""

    @pytest.fixture(autouse=True)
    def _store(self, pack_store):
        """Route every request to the mocked results pack store."""
        with patch("gutcheck_content.routes.results_packs.get_store", return_value=pack_store):
            yield

    @pytest.mark.parametrize(
        "params",
        [
            {"resultsVersion": "2", "levelId": "level1"},
            {"assessmentType": "gut-check", "levelId": "level1"},
            {"assessmentType": "gut-check", "resultsVersion": "2"},
        ],
    )
    def test_missing_parameters(self, client, params) -> None:
        """Verify every identity parameter is required."""
        response = client.get(URL, params=params)

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required parameters: assessmentType, resultsVersion, levelId"

    def test_bundled_pack_through_alias(self, client) -> None:
        """Verify a configured level alias serves the canonical bundled pack."""
        response = client.get(URL, params=_params("v2", "struggling"))

        assert response.status_code == 200
        body = response.json()
        assert body["source"] == "file"
        assert body["document"]["label"] == "Highly Imbalanced"
        assert body["document"]["flow"]["page2"]["videoAssetUrl"].startswith("https://www.youtube.com/watch")

    def test_legacy_bundled_pack(self, client) -> None:
        """Verify the v1 bundled packs are served in the legacy shape."""
        body = client.get(URL, params=_params("1", "level3")).json()

        assert body["document"]["label"] == "Imbalanced"
        assert "flow" not in body["document"]
        assert "shape" not in body["document"]

    def test_unknown_level(self, client) -> None:
        """Verify an unmappable level id is a bad request."""
        response = client.get(URL, params=_params("2", "mystery"))

        assert response.status_code == 400
        assert 'levelId "mystery"' in response.json()["error"]

    def test_published_pack(self, client, pack_store, flow_pack_doc, make_identity, make_revision) -> None:
        """Verify a published CMS pack wins over the bundled file."""
        key = ContentKey.results_pack("gut-check", 2, "level3")
        pack_store.identities.find = AsyncMock(return_value=make_identity(key))
        pack_store.pointers.get_for_identity = AsyncMock(
            return_value=Pointer(id="identity-1", published_revision_id="rev-1")
        )
        pack_store.revisions.get_by_id = AsyncMock(return_value=make_revision(flow_pack_doc))

        body = client.get(URL, params=_params("2", "level3")).json()

        assert body["source"] == "cms"
        assert body["document"] == flow_pack_doc
        assert body["ref"]["level_id"] == "level3"

    def test_cms_empty_falls_back_to_file(self, client, pack_store, make_identity) -> None:
        """Verify an empty pack identity serves the bundled pack."""
        key = ContentKey.results_pack("gut-check", 2, "level1")
        pack_store.identities.find = AsyncMock(return_value=make_identity(key))
        pack_store.pointers.get_for_identity = AsyncMock(return_value=Pointer(id="identity-1"))

        body = client.get(URL, params=_params("2", "level1")).json()

        assert body["source"] == "file"
        assert body["identity_id"] == "identity-1"
        assert body["document"]["label"] == "Balanced"

    def test_not_found(self, client) -> None:
        """Verify an unknown assessment is a 404."""
        response = client.get(URL, params=_params("2", "level1", "sleep-check"))

        assert response.status_code == 404
