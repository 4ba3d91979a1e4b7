"""
Posts API Routes

Post listing and lookup from the local post store, and post submission to
the GitHub content repository.
"""

import logging
from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from gitpress.api.deps import (
    get_orchestrator,
    get_post_store,
    get_session_manager,
    get_view_cache,
)
from gitpress.models.api_responses import SubmissionErrorKind, SubmissionResponse
from gitpress.models.post import PostData, PostMeta
from gitpress.services.post_store import PostStore
from gitpress.services.post_submission import PostSubmissionOrchestrator
from gitpress.services.session_store import SessionManager
from gitpress.services.view_cache import ViewCache

logger = logging.getLogger(__name__)
router = APIRouter()

ERROR_STATUS = {
    SubmissionErrorKind.VALIDATION: 422,
    SubmissionErrorKind.AUTHENTICATION: 401,
    SubmissionErrorKind.CONFIGURATION: 500,
    SubmissionErrorKind.CONFLICT: 409,
    SubmissionErrorKind.REMOTE: 502,
}


@router.get("", response_model=List[PostMeta])
async def list_posts(
    store: PostStore = Depends(get_post_store),
    cache: ViewCache = Depends(get_view_cache),
):
    """List all posts, newest first."""
    return cache.get_or_build("/posts", store.list_posts)


@router.get("/{slug}", response_model=PostData)
async def get_post(
    slug: str,
    store: PostStore = Depends(get_post_store),
    cache: ViewCache = Depends(get_view_cache),
):
    """Return a single post with its raw Markdown body."""
    post = cache.get_or_build(f"/posts/{slug}", lambda: store.get_post(slug))
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.post("", response_model=SubmissionResponse)
async def submit_post(
    request: Request,
    payload: Dict[str, Any] = Body(...),
    sessions: SessionManager = Depends(get_session_manager),
    orchestrator: PostSubmissionOrchestrator = Depends(get_orchestrator),
):
    """
    Commit a post draft to the content repository.

    Body: {title, slug, content}. Returns {success, error?} with a status code
    matching the failure kind.
    """
    lookup = sessions.read(request)
    result = await orchestrator.submit(payload, lookup.session)

    status_code = 201 if result.success else ERROR_STATUS[result.error_kind]
    response = JSONResponse(
        status_code=status_code, content=result.model_dump(mode="json", exclude_none=True)
    )
    if lookup.stale:
        sessions.delete_session(response)
    return response
