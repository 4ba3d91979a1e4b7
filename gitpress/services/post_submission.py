"""
Post Submission Orchestrator

Flow:
1. Validate the draft (no network calls on failure)
2. Require a session with a user and an access token
3. Derive path and commit message, render the Markdown file
4. Commit through the ContentCommitter
5. Invalidate the home, listing and post views

Failures are returned as a SubmissionResponse, never raised.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from gitpress.errors import (
    AuthenticationError,
    CommitConflictError,
    ConfigurationError,
    NetworkError,
    RemoteAPIError,
    ValidationError,
)
from gitpress.integrations.github.contents import ContentCommitter
from gitpress.models.api_responses import SubmissionErrorKind, SubmissionResponse
from gitpress.models.post import PostDraft
from gitpress.models.session import SessionData
from gitpress.utils.helpers import render_post_document

logger = logging.getLogger(__name__)

COMMIT_FAILED_MESSAGE = "Failed to commit changes to GitHub. Check server logs for details."
CONFLICT_MESSAGE = (
    "The post was changed on GitHub while saving. Reload it and submit again."
)
UNEXPECTED_MESSAGE = "An unexpected error occurred while attempting to save the post."


def commit_message_for(draft: PostDraft) -> str:
    return f"feat: add post '{draft.title}'"


def invalidation_targets(slug: str) -> Iterable[str]:
    return ("/", "/posts", f"/posts/{slug}")


def validate_draft(raw: Mapping[str, Any]) -> PostDraft:
    """Validate raw input into a PostDraft, raising ValidationError with field detail."""
    try:
        return PostDraft.model_validate(raw)
    except PydanticValidationError as e:
        field_errors: dict = {}
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "draft"
            field_errors.setdefault(field, []).append(
                error["msg"].removeprefix("Value error, ")
            )
        raise ValidationError("Input validation failed", field_errors) from e


class PostSubmissionOrchestrator:
    """Turns a submitted draft into a commit on the content repository."""

    def __init__(
        self,
        committer_factory: Callable[[], ContentCommitter],
        posts_path: str = "posts",
        invalidate: Optional[Callable[[str], None]] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.committer_factory = committer_factory
        self.posts_path = posts_path.strip("/") or "posts"
        self.invalidate = invalidate
        self.clock = clock

    def file_path_for(self, draft: PostDraft) -> str:
        return f"{self.posts_path}/{draft.slug}.md"

    async def submit(
        self, raw: Mapping[str, Any], session: Optional[SessionData]
    ) -> SubmissionResponse:
        # 1. Validate input
        try:
            draft = validate_draft(raw)
        except ValidationError as e:
            logger.error(f"[submit] {e}: {e.field_errors}")
            return SubmissionResponse(
                success=False,
                error=str(e),
                error_kind=SubmissionErrorKind.VALIDATION,
                field_errors=e.field_errors,
            )
        logger.info(f"[submit] Input validated for slug: {draft.slug}")

        # 2. Check authentication
        try:
            access_token = self._require_token(session)
        except AuthenticationError as e:
            logger.error(f"[submit] {e}")
            return SubmissionResponse(
                success=False,
                error=str(e),
                error_kind=SubmissionErrorKind.AUTHENTICATION,
            )

        # 3. Prepare commit details
        try:
            committer = self.committer_factory()
        except ConfigurationError as e:
            logger.error(f"[submit] {e}")
            return SubmissionResponse(
                success=False,
                error="GitHub repository configuration missing.",
                error_kind=SubmissionErrorKind.CONFIGURATION,
            )

        file_path = self.file_path_for(draft)
        message = commit_message_for(draft)
        document = render_post_document(draft, created_at=self.clock())
        logger.info(f"[submit] Prepared commit: path={file_path}, message={message}")

        # 4. Commit
        try:
            result = await committer.commit_file(file_path, document, message, access_token)
        except CommitConflictError as e:
            logger.error(f"[submit] Conflicting edit for {file_path}: {e}")
            return SubmissionResponse(
                success=False,
                error=CONFLICT_MESSAGE,
                error_kind=SubmissionErrorKind.CONFLICT,
                path=file_path,
            )
        except (RemoteAPIError, NetworkError) as e:
            logger.error(
                f"[submit] Commit failed: repo={committer.repository.full_name}, "
                f"path={file_path}, error={type(e).__name__}: {e}"
            )
            return SubmissionResponse(
                success=False,
                error=COMMIT_FAILED_MESSAGE,
                error_kind=SubmissionErrorKind.REMOTE,
                path=file_path,
            )
        except Exception:
            logger.exception(f"[submit] Unexpected error committing {file_path}")
            return SubmissionResponse(
                success=False,
                error=UNEXPECTED_MESSAGE,
                error_kind=SubmissionErrorKind.REMOTE,
                path=file_path,
            )

        # 5. Invalidate affected views
        if self.invalidate is not None:
            for target in invalidation_targets(draft.slug):
                self.invalidate(target)

        return SubmissionResponse(
            success=True, path=result.path, commit_sha=result.commit_sha
        )

    @staticmethod
    def _require_token(session: Optional[SessionData]) -> str:
        if session is None or session.user is None:
            raise AuthenticationError("User not authenticated.")
        if not session.access_token:
            raise AuthenticationError("GitHub token not found.")
        return session.access_token
