"""
Dependency providers for the API routes.

Routes receive their collaborators from here so tests can swap them through
app.dependency_overrides.
"""

import logging
from pathlib import Path
from typing import Optional
from fastapi import Depends

from gitpress.config import Settings, get_settings
from gitpress.errors import ConfigurationError
from gitpress.integrations.github import (
    ContentCommitter,
    OAuthExchanger,
    UserResolver,
    github_factory,
)
from gitpress.services.post_store import PostStore
from gitpress.services.post_submission import PostSubmissionOrchestrator
from gitpress.services.session_store import SessionManager
from gitpress.services.view_cache import ViewCache

logger = logging.getLogger(__name__)

_view_cache = ViewCache()


def get_view_cache() -> ViewCache:
    return _view_cache


def get_session_manager(settings: Settings = Depends(get_settings)) -> SessionManager:
    return SessionManager(
        secret=settings.session_secret(),
        cookie_name=settings.session_cookie_name,
        ttl_seconds=settings.session_ttl_seconds,
        secure=settings.secure_cookies,
    )


def get_oauth_exchanger(
    settings: Settings = Depends(get_settings),
) -> Optional[OAuthExchanger]:
    """OAuth exchanger, or None when the OAuth app is not configured."""
    try:
        client_id, client_secret = settings.oauth_credentials()
    except ConfigurationError as e:
        logger.error(str(e))
        return None
    return OAuthExchanger(
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=settings.callback_url,
        timeout=settings.http_timeout,
    )


def get_user_resolver(settings: Settings = Depends(get_settings)) -> UserResolver:
    return UserResolver(github_factory=github_factory(settings.http_timeout))


def get_post_store(settings: Settings = Depends(get_settings)) -> PostStore:
    return PostStore(Path(settings.local_posts_dir))


def get_orchestrator(
    settings: Settings = Depends(get_settings),
    cache: ViewCache = Depends(get_view_cache),
) -> PostSubmissionOrchestrator:
    def committer_factory() -> ContentCommitter:
        return ContentCommitter(
            repository=settings.repository(),
            github_factory=github_factory(settings.http_timeout),
            branch=settings.github_branch or None,
        )

    return PostSubmissionOrchestrator(
        committer_factory=committer_factory,
        posts_path=settings.posts_path,
        invalidate=cache.invalidate,
    )
