"""Health route."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from gutcheck_content.health import check_database

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(request: Request) -> dict[str, Any]:
    cosmos = request.app.state.cosmos
    check = await check_database(cosmos.database)
    return {"status": "ok", "checks": [check]}
