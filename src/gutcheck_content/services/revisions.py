"""Admin write path — scaffold identities, create revisions, move pointers, archive."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gutcheck_content.content.hashing import hash_content
from gutcheck_content.content.validation import ValidationResult, validate_question_set, validate_results_pack
from gutcheck_content.errors import ContentValidationError, RevisionError, RevisionNotFoundError
from gutcheck_content.models.identity import ContentIdentity, ContentKey, ContentType, IdentityStatus
from gutcheck_content.models.pointer import Pointer
from gutcheck_content.models.revision import SCHEMA_VERSIONS, Revision, RevisionStatus
from gutcheck_content.resolver.attempt import attempt

if TYPE_CHECKING:
    from gutcheck_content.database.store import ContentStore

logger = logging.getLogger(__name__)

_AUDIT_PREFIX = {
    ContentType.QUESTION_SET: "questions",
    ContentType.RESULTS_PACK: "results_packs",
}


def validate_content(content_type: ContentType, content: Any, identity: ContentIdentity) -> ValidationResult:
    if content_type == ContentType.QUESTION_SET:
        return validate_question_set(content, assessment_type=identity.assessment_type)
    return validate_results_pack(content)


async def _audit(
    store: ContentStore,
    verb: str,
    entity_type: str,
    entity_id: str,
    actor: str | None,
    **metadata: Any,
) -> None:
    """Record an admin action; an unreachable audit log never fails the write."""
    action = f"{_AUDIT_PREFIX[store.content_type]}.{verb}"
    await attempt("audit log", store.audit.record(actor, action, entity_type, entity_id, metadata))


async def ensure_identity(key: ContentKey, store: ContentStore, *, updated_by: str | None = None) -> ContentIdentity:
    """Return the identity for ``key``, creating it with an empty pointer if missing."""
    identity = await store.identities.find(key)
    if identity is not None:
        return identity

    identity = ContentIdentity.from_key(key)
    await store.identities.create(identity)
    await store.pointers.upsert(Pointer(id=identity.id, updated_by=updated_by))
    logger.info("Identity created — %s id=%s", key.describe(), identity.id)
    return identity


async def _get_identity(identity_id: str, store: ContentStore) -> ContentIdentity:
    identity = await store.identities.get(identity_id, identity_id)
    if identity is None:
        raise RevisionNotFoundError(f"{store.content_type} identity {identity_id} not found")
    return identity


async def _get_owned_revision(identity_id: str, revision_id: str, store: ContentStore) -> Revision:
    revision = await store.revisions.get_by_id(revision_id)
    if revision is None:
        raise RevisionNotFoundError(f"Revision {revision_id} not found")
    if revision.identity_id != identity_id:
        raise RevisionError(f"Revision {revision_id} does not belong to identity {identity_id}")
    return revision


async def create_revision(
    identity_id: str,
    content: Any,
    store: ContentStore,
    *,
    created_by: str | None = None,
    change_summary: str | None = None,
) -> Revision:
    """Validate, hash and store ``content`` as the next draft revision.

    Raises:
        RevisionNotFoundError: If the identity does not exist.
        ContentValidationError: If the content fails validation.
    """
    identity = await _get_identity(identity_id, store)
    validation = validate_content(store.content_type, content, identity)
    if not validation.ok:
        raise ContentValidationError("Validation failed", validation.errors, validation.warnings)

    document = validation.normalized
    latest = await store.revisions.get_latest(identity.id)
    revision = Revision(
        identity_id=identity.id,
        revision_number=(latest.revision_number if latest else 0) + 1,
        schema_version=SCHEMA_VERSIONS[store.content_type],
        content_json=document,
        content_hash=hash_content(document),
        change_summary=change_summary,
        created_by=created_by,
    )
    await store.revisions.create(revision)
    await _audit(
        store,
        "create_draft",
        str(store.content_type),
        identity.id,
        created_by,
        revision_id=revision.id,
        revision_number=revision.revision_number,
    )
    logger.info(
        "Revision created — identity=%s revision=%s number=%d hash=%s",
        identity.id,
        revision.id,
        revision.revision_number,
        revision.content_hash,
    )
    return revision


async def publish_revision(
    identity_id: str,
    revision_id: str,
    store: ContentStore,
    *,
    updated_by: str | None = None,
) -> Pointer:
    """Point the identity's published slot at ``revision_id`` after re-validating it.

    Publishing a results pack also clears its preview slot; a question set
    keeps its preview. The newly published revision is marked published and
    the one it replaces is marked archived.
    """
    identity = await _get_identity(identity_id, store)
    revision = await _get_owned_revision(identity.id, revision_id, store)

    validation = validate_content(store.content_type, revision.content_json, identity)
    if not validation.ok:
        raise ContentValidationError("Validation failed", validation.errors, validation.warnings)

    previous = await store.pointers.get_for_identity(identity.id)
    replaced_id = previous.published_revision_id if previous else None

    pointer = await store.pointers.set_published(
        identity.id,
        revision.id,
        updated_by,
        clear_preview=store.content_type == ContentType.RESULTS_PACK,
    )
    await store.revisions.set_status(revision, RevisionStatus.PUBLISHED)
    if replaced_id and replaced_id != revision.id:
        replaced = await store.revisions.get_by_id(replaced_id)
        if replaced is not None:
            await store.revisions.set_status(replaced, RevisionStatus.ARCHIVED)

    await _audit(
        store, "publish", f"{store.content_type}_pointer", identity.id, updated_by, revision_id=revision.id
    )
    logger.info("Revision published — identity=%s revision=%s by=%s", identity.id, revision.id, updated_by)
    return pointer


async def set_preview_revision(
    identity_id: str,
    revision_id: str | None,
    store: ContentStore,
    *,
    updated_by: str | None = None,
) -> Pointer:
    """Point the identity's preview slot at ``revision_id``, or clear it with None."""
    identity = await _get_identity(identity_id, store)
    if revision_id is not None:
        await _get_owned_revision(identity.id, revision_id, store)

    pointer = await store.pointers.set_preview(identity.id, revision_id, updated_by)
    await _audit(
        store, "set_preview", f"{store.content_type}_pointer", identity.id, updated_by, revision_id=revision_id
    )
    logger.info("Preview set — identity=%s revision=%s by=%s", identity.id, revision_id, updated_by)
    return pointer


async def archive_identity(identity_id: str, store: ContentStore, *, updated_by: str | None = None) -> ContentIdentity:
    """Archive an identity and empty its pointer so resolution reports ``cms_empty``.

    Revisions are kept; unarchiving does not restore the pointer.

    Raises:
        RevisionNotFoundError: If the identity does not exist.
        RevisionError: If the identity is already archived.
    """
    identity = await _get_identity(identity_id, store)
    if identity.status == IdentityStatus.ARCHIVED:
        raise RevisionError(f"{store.content_type} {identity.slug} is already archived")

    identity.status = IdentityStatus.ARCHIVED
    await store.identities.upsert(identity)
    await store.pointers.clear(identity.id, updated_by)
    await _audit(
        store,
        "archive",
        str(store.content_type),
        identity.id,
        updated_by,
        assessment_type=identity.assessment_type,
        version=identity.version,
    )
    logger.info("Identity archived — %s id=%s by=%s", identity.slug, identity.id, updated_by)
    return identity


async def unarchive_identity(
    identity_id: str, store: ContentStore, *, updated_by: str | None = None
) -> ContentIdentity:
    """Return an archived identity to active.

    Raises:
        RevisionNotFoundError: If the identity does not exist.
        RevisionError: If the identity is already active.
    """
    identity = await _get_identity(identity_id, store)
    if identity.status == IdentityStatus.ACTIVE:
        raise RevisionError(f"{store.content_type} {identity.slug} is already active")

    identity.status = IdentityStatus.ACTIVE
    await store.identities.upsert(identity)
    await _audit(
        store,
        "unarchive",
        str(store.content_type),
        identity.id,
        updated_by,
        assessment_type=identity.assessment_type,
        version=identity.version,
    )
    logger.info("Identity unarchived — %s id=%s by=%s", identity.slug, identity.id, updated_by)
    return identity
