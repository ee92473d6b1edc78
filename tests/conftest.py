"""Shared fixtures: sample content documents and mocked content stores."""

from __future__ import annotations

import copy
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from gutcheck_content.database.store import ContentStore
from gutcheck_content.models.identity import ContentIdentity, ContentKey, ContentType
from gutcheck_content.models.pointer import Pointer
from gutcheck_content.models.revision import Revision


def _options(prefix: str) -> list[dict[str, Any]]:
    labels = ("Never", "Sometimes", "Often", "Always")
    return [{"id": f"{prefix}_{value}", "label": labels[value], "value": value} for value in range(4)]


QUESTION_SET: dict[str, Any] = {
    "version": "2",
    "assessmentType": "gut-check",
    "sections": [
        {"id": "digestion", "title": "Digestion", "questionIds": ["bloating", "discomfort"]},
        {"id": "energy", "title": "Energy", "questionIds": ["slump"]},
    ],
    "questions": [
        {"id": "bloating", "text": "How often do you feel bloated?", "options": _options("bloating")},
        {"id": "discomfort", "text": "How often is digestion uncomfortable?", "options": _options("discomfort")},
        {"id": "slump", "text": "How often do you hit an afternoon slump?", "options": _options("slump")},
    ],
}

FLOW: dict[str, Any] = {
    "page1": {
        "headline": "Your gut needs some care",
        "body": ["Your answers point to a gut under some strain."],
        "snapshotTitle": "Your snapshot",
        "snapshotBullets": ["Bloating after meals", "Uneven energy", "Some food reactions"],
        "meaningBody": "Small daily changes can make a real difference.",
    },
    "page2": {
        "headline": "Three steps to start",
        "stepBullets": ["Eat more plants", "Sleep on schedule", "Walk after dinner"],
        "videoCtaLabel": "Watch the video",
        "videoAssetUrl": "https://youtu.be/dQw4w9WgXcQ?t=45",
    },
    "page3": {
        "problemHeadline": "Why it keeps coming back",
        "problemBody": ["Quick fixes rarely last."],
        "tryTitle": "Try this week",
        "tryBullets": ["One new vegetable", "Fruit instead of a snack", "A short walk"],
        "tryCloser": "Notice how you feel.",
        "mechanismTitle": "How it works",
        "mechanismBodyTop": "Your microbes talk to your brain.",
        "mechanismPills": ["Digestion", "Energy", "Mood", "Immunity"],
        "mechanismBodyBottom": "Looking after them pays off.",
        "methodTitle": "The Method",
        "methodBody": ["A structured programme for your gut."],
        "methodLearnBullets": ["What to eat", "How to build habits", "How to recover"],
        "methodCtaLabel": "Join the Method",
        "methodEmailLinkLabel": "Email me the details",
    },
}

LEGACY_FIELDS: dict[str, Any] = {
    "summary": "Your gut is under some strain.",
    "keyPatterns": ["Bloating", "Low energy"],
    "firstFocusAreas": ["Fibre", "Sleep"],
    "methodPositioning": "The Method gives you a plan.",
}


@pytest.fixture
def question_set_doc() -> dict[str, Any]:
    """Return a valid v2 question set document."""
    return copy.deepcopy(QUESTION_SET)


@pytest.fixture
def flow_pack_doc() -> dict[str, Any]:
    """Return a valid Flow v2 results pack."""
    return {"label": "Imbalanced", "flow": copy.deepcopy(FLOW)}


@pytest.fixture
def legacy_pack_doc() -> dict[str, Any]:
    """Return a valid legacy results pack."""
    return {"label": "Imbalanced", **copy.deepcopy(LEGACY_FIELDS)}


def _mock_store(content_type: ContentType) -> ContentStore:
    mock_db = MagicMock()
    mock_db.get_container_client.return_value = AsyncMock()
    store = ContentStore.for_content_type(mock_db, content_type)

    created: dict[str, ContentIdentity] = {}

    def _create_identity(identity: ContentIdentity) -> ContentIdentity:
        created[identity.id] = identity
        return identity

    store.identities.find = AsyncMock(return_value=None)
    store.identities.get = AsyncMock(side_effect=lambda item_id, partition_key: created.get(item_id))
    store.identities.create = AsyncMock(side_effect=_create_identity)
    store.identities.upsert = AsyncMock(side_effect=lambda doc: doc)
    store.pointers.get_for_identity = AsyncMock(return_value=None)
    store.pointers.upsert = AsyncMock(side_effect=lambda doc: doc)
    store.pointers.set_published = AsyncMock()
    store.pointers.set_preview = AsyncMock()
    store.pointers.clear = AsyncMock(side_effect=lambda identity_id, updated_by: Pointer(id=identity_id))
    store.revisions.get_by_id = AsyncMock(return_value=None)
    store.revisions.get_latest = AsyncMock(return_value=None)
    store.revisions.create = AsyncMock(side_effect=lambda doc: doc)
    store.revisions.list_by_identity = AsyncMock(return_value=[])
    store.revisions.set_status = AsyncMock(side_effect=lambda revision, status: revision)
    store.audit.record = AsyncMock()
    store.audit.list_for_entity = AsyncMock(return_value=[])
    return store


@pytest.fixture
def question_store() -> ContentStore:
    """Create a question set store whose repository calls are AsyncMocks that miss by default."""
    return _mock_store(ContentType.QUESTION_SET)


@pytest.fixture
def pack_store() -> ContentStore:
    """Create a results pack store whose repository calls are AsyncMocks that miss by default."""
    return _mock_store(ContentType.RESULTS_PACK)


@pytest.fixture
def make_identity() -> Callable[..., ContentIdentity]:
    """Build an identity for a key with a fixed id."""

    def _make(key: ContentKey, identity_id: str = "identity-1") -> ContentIdentity:
        identity = ContentIdentity.from_key(key)
        identity.id = identity_id
        return identity

    return _make


@pytest.fixture
def make_revision() -> Callable[..., Revision]:
    """Build a stored revision with a fixed id and hash."""

    def _make(
        content: dict[str, Any],
        *,
        revision_id: str = "rev-1",
        identity_id: str = "identity-1",
        number: int = 1,
    ) -> Revision:
        return Revision(
            id=revision_id,
            identity_id=identity_id,
            revision_number=number,
            schema_version="v2_question_schema_1",
            content_json=content,
            content_hash=f"{revision_id}-hash",
        )

    return _make


@pytest.fixture
def make_settings() -> Callable[..., SimpleNamespace]:
    """Build minimal settings for app factory and lifespan wiring tests."""

    def _make(**app_fields: Any) -> SimpleNamespace:
        app = {
            "env": "test",
            "log_level": "INFO",
            "log_file": "",
            "session_secret": "test-secret",
            "is_development": True,
            "host": "127.0.0.1",
            "port": 8000,
        }
        app.update(app_fields)
        return SimpleNamespace(
            app=SimpleNamespace(**app),
            content=SimpleNamespace(level_aliases={"struggling": "level4"}, default_assessment_type="gut-check"),
            cosmos=SimpleNamespace(endpoint="", key="", database="gutcheck-content"),
        )

    return _make
