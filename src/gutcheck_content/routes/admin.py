"""Admin routes — scaffold identities, create revisions, publish, preview, archive, CSV import."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gutcheck_content.auth.middleware import require_role
from gutcheck_content.models.identity import ContentKey, ContentType
from gutcheck_content.models.resolution import UserRole
from gutcheck_content.routes.params import get_store
from gutcheck_content.services.csv_import import import_question_set_csv
from gutcheck_content.services.revisions import (
    archive_identity,
    create_revision,
    ensure_identity,
    publish_revision,
    set_preview_revision,
    unarchive_identity,
)

router = APIRouter(prefix="/api/admin", tags=["admin"])

_editor = require_role(UserRole.EDITOR, UserRole.ADMIN)
_admin = require_role(UserRole.ADMIN)

_CONTENT_TYPES = {
    "question-sets": ContentType.QUESTION_SET,
    "results-packs": ContentType.RESULTS_PACK,
}


class _Body(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IdentityRequest(_Body):
    assessment_type: str
    version: str
    locale: str | None = None
    level_id: str | None = None


class RevisionRequest(_Body):
    identity_id: str
    content: dict[str, Any]
    change_summary: str | None = None


class PublishRequest(_Body):
    identity_id: str
    revision_id: str


class PreviewRequest(_Body):
    identity_id: str
    revision_id: str | None = None


class CsvImportRequest(_Body):
    meta: str
    sections: str
    questions: str
    options: str


def _content_type(slug: str) -> ContentType:
    content_type = _CONTENT_TYPES.get(slug)
    if content_type is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown content type: {slug}")
    return content_type


def _actor(user: dict[str, Any]) -> str | None:
    return user.get("id") or user.get("email")


@router.post("/question-sets/import-csv", status_code=status.HTTP_201_CREATED)
async def import_csv(
    request: Request,
    body: CsvImportRequest,
    user: dict[str, Any] = Depends(_editor),
) -> Any:
    """Import a question set from four CSV files as a new draft revision."""
    store = get_store(request, ContentType.QUESTION_SET)
    result = await import_question_set_csv(
        body.meta, body.sections, body.questions, body.options, store, created_by=_actor(user)
    )
    if not result.ok or result.identity is None or result.revision is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "CSV import failed", "errors": [e.to_dict() for e in result.errors]},
        )
    return {
        "identity": result.identity.model_dump(mode="json"),
        "revision": result.revision.model_dump(mode="json", exclude={"content_json"}),
    }


@router.post("/{content_type}/identities", status_code=status.HTTP_201_CREATED)
async def create_identity(
    request: Request,
    content_type: str,
    body: IdentityRequest,
    user: dict[str, Any] = Depends(_editor),
) -> dict[str, Any]:
    """Scaffold an identity with an empty pointer, or return the existing one."""
    kind = _content_type(content_type)
    if kind == ContentType.RESULTS_PACK:
        if not body.level_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="levelId is required for results packs")
        key = ContentKey.results_pack(body.assessment_type, body.version, body.level_id)
    else:
        key = ContentKey.question_set(body.assessment_type, body.version, body.locale)

    identity = await ensure_identity(key, get_store(request, kind), updated_by=_actor(user))
    return identity.model_dump(mode="json")


@router.post("/{content_type}/identities/{identity_id}/archive")
async def archive_route(
    request: Request,
    content_type: str,
    identity_id: str,
    user: dict[str, Any] = Depends(_admin),
) -> dict[str, Any]:
    """Archive an identity and clear its pointers. Admin only."""
    store = get_store(request, _content_type(content_type))
    identity = await archive_identity(identity_id, store, updated_by=_actor(user))
    return identity.model_dump(mode="json")


@router.post("/{content_type}/identities/{identity_id}/unarchive")
async def unarchive_route(
    request: Request,
    content_type: str,
    identity_id: str,
    user: dict[str, Any] = Depends(_admin),
) -> dict[str, Any]:
    """Return an archived identity to active. Admin only."""
    store = get_store(request, _content_type(content_type))
    identity = await unarchive_identity(identity_id, store, updated_by=_actor(user))
    return identity.model_dump(mode="json")


@router.get("/{content_type}/identities/{identity_id}/audit")
async def list_audit(
    request: Request,
    content_type: str,
    identity_id: str,
    user: dict[str, Any] = Depends(_editor),
) -> list[dict[str, Any]]:
    """List the admin actions recorded against an identity, newest first."""
    store = get_store(request, _content_type(content_type))
    entries = await store.audit.list_for_entity(identity_id)
    return [entry.model_dump(mode="json") for entry in entries]


@router.get("/{content_type}/identities/{identity_id}/revisions")
async def list_revisions(
    request: Request,
    content_type: str,
    identity_id: str,
    user: dict[str, Any] = Depends(_editor),
) -> list[dict[str, Any]]:
    """List an identity's revisions, newest first, without their content."""
    store = get_store(request, _content_type(content_type))
    revisions = await store.revisions.list_by_identity(identity_id)
    return [r.model_dump(mode="json", exclude={"content_json"}) for r in revisions]


@router.post("/{content_type}/revisions", status_code=status.HTTP_201_CREATED)
async def create_revision_route(
    request: Request,
    content_type: str,
    body: RevisionRequest,
    user: dict[str, Any] = Depends(_editor),
) -> dict[str, Any]:
    """Store new content as the next draft revision of an identity."""
    store = get_store(request, _content_type(content_type))
    revision = await create_revision(
        body.identity_id,
        body.content,
        store,
        created_by=_actor(user),
        change_summary=body.change_summary,
    )
    return revision.model_dump(mode="json", exclude={"content_json"})


@router.post("/{content_type}/publish")
async def publish_route(
    request: Request,
    content_type: str,
    body: PublishRequest,
    user: dict[str, Any] = Depends(_admin),
) -> dict[str, Any]:
    """Publish a revision. Admin only."""
    store = get_store(request, _content_type(content_type))
    pointer = await publish_revision(body.identity_id, body.revision_id, store, updated_by=_actor(user))
    return pointer.model_dump(mode="json")


@router.post("/{content_type}/preview")
async def preview_route(
    request: Request,
    content_type: str,
    body: PreviewRequest,
    user: dict[str, Any] = Depends(_editor),
) -> dict[str, Any]:
    """Set or clear the preview revision."""
    store = get_store(request, _content_type(content_type))
    pointer = await set_preview_revision(body.identity_id, body.revision_id, store, updated_by=_actor(user))
    return pointer.model_dump(mode="json")
