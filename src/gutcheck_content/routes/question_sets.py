"""Public question set resolution route."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request, status

from gutcheck_content.auth.middleware import get_user_role
from gutcheck_content.models.identity import ContentKey, ContentType
from gutcheck_content.models.resolution import ResolutionSource, can_preview
from gutcheck_content.resolver import QuestionSetResolver
from gutcheck_content.routes.params import get_store, parse_flag, parse_pinned_ref, parse_version

router = APIRouter(prefix="/api/question-sets", tags=["question-sets"])


@router.get("/resolve")
async def resolve_question_set(
    request: Request,
    assessment_type: str | None = Query(default=None, alias="assessmentType"),
    assessment_version: str | None = Query(default=None, alias="assessmentVersion"),
    locale: str | None = None,
    preview: str | None = None,
    pinned_ref: str | None = Query(default=None, alias="pinnedRef"),
) -> dict[str, Any]:
    """Resolve a question set, serving the bundled file when the CMS slot is empty."""
    settings = request.app.state.settings
    key = ContentKey.question_set(
        assessment_type or settings.content.default_assessment_type,
        parse_version(assessment_version),
        locale,
    )
    role = get_user_role(request)
    wants_preview = parse_flag(preview)

    resolver = QuestionSetResolver(get_store(request, ContentType.QUESTION_SET), request.app.state.loader)
    result = await resolver.resolve(
        key,
        preview=wants_preview,
        user_role=role,
        pinned_ref=parse_pinned_ref(pinned_ref),
    )

    if result.source == ResolutionSource.CMS_EMPTY:
        fallback = resolver.resolve_file(key)
        if fallback is None:
            slots = "published or preview" if can_preview(wants_preview, role) else "published"
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{key.describe()} exists in the CMS but has no {slots} revision. Publish a revision.",
            )
        fallback.identity_id = result.identity_id
        result = fallback

    return result.to_response()
