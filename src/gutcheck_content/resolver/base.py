"""Revision resolution: pinned, then preview, then published, then bundled file.

Each step only moves on after a defined miss. Store failures are absorbed
by ``attempt`` and count as misses. A stored document that matches the
requested identity but fails validation is not a miss; it raises
``InvalidContentError``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from gutcheck_content.content.hashing import hash_content
from gutcheck_content.content.loader import FileContentLoader
from gutcheck_content.database.store import ContentStore
from gutcheck_content.errors import ContentNotFoundError, ContentNotPublishedError
from gutcheck_content.models.documents import ContentDocument
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
from gutcheck_content.models.revision import Revision
from gutcheck_content.resolver.attempt import attempt

logger = logging.getLogger(__name__)


@dataclass
class _Trace:
    """What the store lookups saw during one ``resolve`` call."""

    identity: ContentIdentity | None = None
    pointer: Pointer | None = None
    failures: list[str] = field(default_factory=list)


class RevisionResolver(ABC):
    """Shared resolution algorithm; subclasses decide how a stored document is accepted."""

    content_type: ContentType

    def __init__(self, store: ContentStore, loader: FileContentLoader) -> None:
        self._store = store
        self._loader = loader

    @abstractmethod
    def accept(self, content: Any, key: ContentKey) -> ContentDocument | None:
        """Return the typed document, or None if it belongs to a different identity.

        Raises:
            InvalidContentError: If the document matches ``key`` but is malformed.
        """

    @abstractmethod
    def parse(self, content: Any, key: ContentKey) -> ContentDocument:
        """Convert a bundled document into its typed form."""

    async def resolve(
        self,
        key: ContentKey,
        *,
        preview: bool = False,
        user_role: UserRole | str | None = None,
        pinned_ref: ContentRef | None = None,
    ) -> ResolveResult:
        """Resolve ``key`` to a document plus provenance.

        Returns a ``cms_empty`` result, without consulting bundled files, when
        the identity's pointer exists but names nothing servable.

        Raises:
            ContentNotPublishedError: The identity exists but nothing could be served.
            ContentNotFoundError: The identity is unknown and no bundled file covers it.
            InvalidContentError: A matching stored or bundled document is malformed.
            UnknownLevelIdError: A results pack level id cannot be normalized.
        """
        if key.content_type != self.content_type:
            raise ValueError(f"{type(self).__name__} cannot resolve {key.content_type} content")

        allow_preview = can_preview(preview, user_role)
        trace = _Trace()

        if pinned_ref is not None:
            result = await self._resolve_pinned(key, pinned_ref, allow_preview=allow_preview, trace=trace)
            if result is not None:
                logger.info("Resolved pinned — %s revision=%s", key.describe(), result.revision_id)
                return result

        if allow_preview:
            result = await self._resolve_pointer(key, preview=True, trace=trace)
            if result is not None:
                logger.info("Resolved preview — %s revision=%s", key.describe(), result.revision_id)
                return result

        result = await self._resolve_pointer(key, preview=False, trace=trace)
        if result is not None:
            logger.info("Resolved published — %s revision=%s", key.describe(), result.revision_id)
            return result

        if trace.identity is not None and self._is_empty(trace.pointer, allow_preview=allow_preview):
            logger.info("Resolved cms_empty — %s identity=%s", key.describe(), trace.identity.id)
            return ResolveResult(source=ResolutionSource.CMS_EMPTY, identity_id=trace.identity.id)

        result = self.resolve_file(key)
        if result is not None:
            logger.info("Resolved file — %s", key.describe())
            return result

        raise self._exhausted(key, trace)

    # --- steps ---------------------------------------------------------------

    async def _resolve_pinned(
        self, key: ContentKey, ref: ContentRef, *, allow_preview: bool, trace: _Trace
    ) -> ResolveResult | None:
        revision_id = ref.pinned_revision_id(allow_preview=allow_preview)
        if revision_id is None or not ref.matches_key(key):
            return None

        revision = await attempt(
            "pinned revision", self._store.revisions.get_by_id(revision_id), failures=trace.failures
        )
        if revision is None:
            logger.info("Pinned revision unavailable — %s revision=%s", key.describe(), revision_id)
            return None
        if ref.identity_id and revision.identity_id != ref.identity_id:
            logger.warning(
                "Pinned revision belongs to another identity — revision=%s expected=%s got=%s",
                revision_id,
                ref.identity_id,
                revision.identity_id,
            )
            return None

        document = self.accept(revision.content_json, key)
        if document is None:
            return None

        return ResolveResult(
            document=document,
            source=ResolutionSource.CMS,
            content_hash=revision.content_hash,
            schema_version=revision.schema_version,
            published_at=revision.created_at,
            is_preview=True if not ref.published_revision_id else None,
            ref=ref,
            identity_id=revision.identity_id,
        )

    async def _resolve_pointer(self, key: ContentKey, *, preview: bool, trace: _Trace) -> ResolveResult | None:
        trace.pointer = None
        identity = await attempt("identity", self._store.identities.find(key), failures=trace.failures)
        if identity is None:
            return None
        trace.identity = identity

        pointer = await attempt(
            "pointer", self._store.pointers.get_for_identity(identity.id), failures=trace.failures
        )
        if pointer is None:
            return None
        trace.pointer = pointer

        revision_id = pointer.preview_revision_id if preview else pointer.published_revision_id
        if revision_id is None:
            return None

        revision = await attempt(
            "revision", self._store.revisions.get_by_id(revision_id), failures=trace.failures
        )
        if revision is None:
            return None

        return self._from_revision(key, identity, revision, preview=preview)

    def _from_revision(
        self, key: ContentKey, identity: ContentIdentity, revision: Revision, *, preview: bool
    ) -> ResolveResult | None:
        if revision.identity_id != identity.id:
            logger.warning(
                "Pointer names a revision of another identity — identity=%s revision=%s",
                identity.id,
                revision.id,
            )
            return None

        document = self.accept(revision.content_json, key)
        if document is None:
            logger.warning("Stored document does not match %s — revision=%s", key.describe(), revision.id)
            return None

        slot = {"preview_revision_id": revision.id} if preview else {"published_revision_id": revision.id}
        ref = ContentRef.for_key(
            key,
            RefSource.CMS,
            identity_id=identity.id,
            content_hash=revision.content_hash,
            **slot,
        )
        return ResolveResult(
            document=document,
            source=ResolutionSource.CMS,
            content_hash=revision.content_hash,
            schema_version=revision.schema_version,
            published_at=revision.created_at,
            is_preview=True if preview else None,
            ref=ref,
            identity_id=identity.id,
        )

    def resolve_file(self, key: ContentKey) -> ResolveResult | None:
        content = self._loader.load(key)
        if content is None:
            return None

        document = self.parse(content, key)
        content_hash = hash_content(content)
        return ResolveResult(
            document=document,
            source=ResolutionSource.FILE,
            content_hash=content_hash,
            ref=ContentRef.for_key(key, RefSource.FILE, content_hash=content_hash),
        )

    # --- outcomes ------------------------------------------------------------

    @staticmethod
    def _is_empty(pointer: Pointer | None, *, allow_preview: bool) -> bool:
        if pointer is None:
            return False
        if allow_preview:
            return pointer.is_empty
        return pointer.published_revision_id is None

    @staticmethod
    def _exhausted(key: ContentKey, trace: _Trace) -> ContentNotFoundError | ContentNotPublishedError:
        unavailable = f" CMS lookups failed: {', '.join(trace.failures)}." if trace.failures else ""
        if trace.identity is not None:
            return ContentNotPublishedError(
                f"{key.describe()} exists in the CMS (identity {trace.identity.id}) but no published "
                f"revision could be served and no bundled file covers it. Publish a revision.{unavailable}"
            )
        return ContentNotFoundError(
            f"{key.describe()} was not found in the CMS and no bundled file covers it. "
            f"Create it in the CMS.{unavailable}"
        )
