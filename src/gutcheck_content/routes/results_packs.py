"""Public results pack resolution route."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request, status

from gutcheck_content.auth.middleware import get_user_role
from gutcheck_content.models.identity import ContentKey, ContentType
from gutcheck_content.models.resolution import ResolutionSource
from gutcheck_content.resolver import ResultsPackResolver
from gutcheck_content.routes.params import get_store, parse_flag, parse_pinned_ref

router = APIRouter(prefix="/api/results-packs", tags=["results-packs"])


@router.get("/resolve")
async def resolve_results_pack(
    request: Request,
    assessment_type: str | None = Query(default=None, alias="assessmentType"),
    results_version: str | None = Query(default=None, alias="resultsVersion"),
    level_id: str | None = Query(default=None, alias="levelId"),
    preview: str | None = None,
    pinned_ref: str | None = Query(default=None, alias="resultsPackRef"),
) -> dict[str, Any]:
    """Resolve the results pack for one level of an assessment."""
    if not assessment_type or not results_version or not level_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required parameters: assessmentType, resultsVersion, levelId",
        )

    key = ContentKey.results_pack(assessment_type, results_version, level_id)
    resolver = ResultsPackResolver(get_store(request, ContentType.RESULTS_PACK), request.app.state.loader)
    result = await resolver.resolve(
        key,
        preview=parse_flag(preview),
        user_role=get_user_role(request),
        pinned_ref=parse_pinned_ref(pinned_ref),
    )

    if result.source == ResolutionSource.CMS_EMPTY:
        fallback = resolver.resolve_file(key)
        if fallback is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{key.describe()} exists in the CMS but has no published revision. Publish a revision.",
            )
        fallback.identity_id = result.identity_id
        result = fallback

    return result.to_response()
