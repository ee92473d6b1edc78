"""Tests for content keys, references and resolution results."""

from gutcheck_content.models.documents import QuestionSetDocument
from gutcheck_content.models.identity import ContentIdentity, ContentKey, ContentType
from gutcheck_content.models.pointer import Pointer
from gutcheck_content.models.resolution import (
    ContentRef,
    RefSource,
    ResolutionSource,
    ResolveResult,
    UserRole,
    can_preview,
)


class TestContentKey:
    """Test the Content Key."""

    def test_version_forms_name_the_same_slot(self) -> None:
        """Verify 2, "2" and "v2" normalize to the same key."""
        keys = {ContentKey.question_set("gut-check", v) for v in (2, "2", "v2", " V2 ")}
        assert len(keys) == 1
        assert keys.pop().version == "2"

    def test_blank_locale_is_none(self) -> None:
        """Verify a blank locale collapses to None."""
        assert ContentKey.question_set("gut-check", 2, "  ").locale is None
        assert ContentKey.question_set("gut-check", 2, " en-GB ").locale == "en-GB"

    def test_results_pack_carries_level(self) -> None:
        """Verify results pack keys carry the level id."""
        key = ContentKey.results_pack("gut-check", "v2", "level3")
        assert key.content_type == ContentType.RESULTS_PACK
        assert key.level_id == "level3"
        assert key.describe() == "results pack gut-check v2 level3"

    def test_identity_slug(self) -> None:
        """Verify the identity slug uses "default" for a missing locale."""
        identity = ContentIdentity.from_key(ContentKey.question_set("gut-check", 2))
        assert identity.slug == "gut-check:2:default"


class TestCanPreview:
    """Test the preview gate."""

    def test_editor_and_admin_may_preview(self) -> None:
        """Verify editors and admins get preview when they ask for it."""
        assert can_preview(True, UserRole.EDITOR) is True
        assert can_preview(True, "admin") is True

    def test_other_roles_may_not_preview(self) -> None:
        """Verify users, missing roles and unrequested preview are denied."""
        assert can_preview(True, UserRole.USER) is False
        assert can_preview(True, None) is False
        assert can_preview(False, UserRole.ADMIN) is False


class TestContentRef:
    """Test the Content Ref."""

    def _ref(self, **fields) -> ContentRef:
        key = ContentKey.question_set("gut-check", 2)
        return ContentRef.for_key(key, RefSource.CMS, identity_id="identity-1", **fields)

    def test_published_revision_is_pinned(self) -> None:
        """Verify the published revision wins over the preview revision."""
        ref = self._ref(published_revision_id="rev-1", preview_revision_id="rev-2")
        assert ref.pinned_revision_id(allow_preview=True) == "rev-1"

    def test_preview_revision_requires_preview_role(self) -> None:
        """Verify a preview-only ref is pinned only for preview roles."""
        ref = self._ref(preview_revision_id="rev-2")
        assert ref.pinned_revision_id(allow_preview=True) == "rev-2"
        assert ref.pinned_revision_id(allow_preview=False) is None

    def test_file_ref_is_never_pinned(self) -> None:
        """Verify file refs never pin a revision."""
        key = ContentKey.question_set("gut-check", 2)
        ref = ContentRef.for_key(key, RefSource.FILE, content_hash="abc")
        assert ref.pinned_revision_id(allow_preview=True) is None

    def test_matches_key(self) -> None:
        """Verify a ref only matches the key it was minted for."""
        ref = self._ref(published_revision_id="rev-1")
        assert ref.matches_key(ContentKey.question_set("gut-check", "v2")) is True
        assert ref.matches_key(ContentKey.question_set("gut-check", 2, "fr")) is False
        assert ref.matches_key(ContentKey.question_set("other", 2)) is False

    def test_client_ref_is_normalized(self) -> None:
        """Verify a client-sent "v2" version and blank locale still match the key."""
        ref = ContentRef.model_validate(
            {
                "source": "cms",
                "content_type": "question_set",
                "assessment_type": "gut-check",
                "version": "v2",
                "locale": "",
                "published_revision_id": "rev-1",
            }
        )
        assert ref.version == "2"
        assert ref.locale is None
        assert ref.matches_key(ContentKey.question_set("gut-check", 2)) is True

    def test_round_trips_through_json(self) -> None:
        """Verify a serialized ref decodes to an equal ref."""
        ref = self._ref(published_revision_id="rev-1", content_hash="abc")
        assert ContentRef.model_validate_json(ref.model_dump_json()) == ref


class TestPointer:
    """Test the Pointer."""

    def test_new_pointer_is_empty(self) -> None:
        """Verify a pointer with no revision ids is empty."""
        pointer = Pointer(id="identity-1")
        assert pointer.is_empty is True
        assert pointer.identity_id == "identity-1"

    def test_preview_only_pointer_is_not_empty(self) -> None:
        """Verify a preview revision makes the pointer non-empty."""
        assert Pointer(id="identity-1", preview_revision_id="rev-1").is_empty is False


class TestResolveResult:
    """Test the Resolve Result."""

    def test_to_response_serializes_camel_case_document(self, question_set_doc) -> None:
        """Verify the response carries the camelCase document and provenance."""
        key = ContentKey.question_set("gut-check", 2)
        ref = ContentRef.for_key(key, RefSource.CMS, identity_id="identity-1", published_revision_id="rev-1")
        result = ResolveResult(
            document=QuestionSetDocument.model_validate(question_set_doc),
            source=ResolutionSource.CMS,
            content_hash="abc",
            ref=ref,
            identity_id="identity-1",
        )

        body = result.to_response()

        assert body["document"] == question_set_doc
        assert body["source"] == "cms"
        assert body["revision_id"] == "rev-1"
        assert body["ref"]["published_revision_id"] == "rev-1"

    def test_cms_empty_has_no_document(self) -> None:
        """Verify a cms_empty result serializes without a document."""
        body = ResolveResult(source=ResolutionSource.CMS_EMPTY, identity_id="identity-1").to_response()
        assert body["document"] is None
        assert body["source"] == "cms_empty"
        assert body["revision_id"] is None
