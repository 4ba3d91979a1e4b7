"""
GitHub Content Committer

Responsibilities:
- Look up the current blob SHA of a file (phase 1)
- Create or update the file with new content and a commit message (phase 2)

The two phases are not atomic at GitHub. Between the lookup and the write
another writer may change the file; GitHub then rejects the write because the
supplied SHA is stale, and that rejection is surfaced as CommitConflictError.
Nothing here retries the write.
"""

import asyncio
import logging
from typing import Optional

import requests
from github.GithubException import GithubException, UnknownObjectException

from gitpress.errors import (
    CommitConflictError,
    CommitError,
    NetworkError,
    ShaLookupError,
)
from gitpress.integrations.github.client import GitHubFactory, build_github_client
from gitpress.integrations.github.models import CommitResult, RepositoryRef

logger = logging.getLogger(__name__)

CONFLICT_STATUSES = (409, 422)


class ContentCommitter:
    """Create-or-update writes of single files through the contents API."""

    def __init__(
        self,
        repository: RepositoryRef,
        github_factory: GitHubFactory = build_github_client,
        branch: Optional[str] = None,
        lookup_attempts: int = 2,
    ):
        self.repository = repository
        self.github_factory = github_factory
        self.branch = branch or None
        self.lookup_attempts = max(1, lookup_attempts)

    def _repo(self, access_token: str):
        client = self.github_factory(access_token)
        # lazy avoids an extra GET /repos/{owner}/{repo}
        return client.get_repo(self.repository.full_name, lazy=True)

    async def lookup_sha(self, file_path: str, access_token: str) -> Optional[str]:
        """
        Return the blob SHA currently stored at file_path, or None if absent.

        The read is retried once on transport errors and 5xx responses.

        Raises:
            ShaLookupError: Any other non-2xx, non-404 outcome
            NetworkError: Transport failure on every attempt
        """
        return await self._lookup(self._repo(access_token), file_path)

    async def _lookup(self, repo, file_path: str) -> Optional[str]:
        kwargs = {"ref": self.branch} if self.branch else {}

        for attempt in range(1, self.lookup_attempts + 1):
            last_attempt = attempt == self.lookup_attempts
            try:
                contents = await asyncio.to_thread(repo.get_contents, file_path, **kwargs)
            except UnknownObjectException:
                logger.debug(f"{file_path} does not exist in {self.repository.full_name}")
                return None
            except GithubException as e:
                if e.status is not None and e.status >= 500 and not last_attempt:
                    logger.warning(
                        f"SHA lookup for {file_path} got {e.status}, retrying"
                    )
                    continue
                logger.error(
                    f"Failed to get file SHA for {file_path} in "
                    f"{self.repository.full_name}: {e.status}"
                )
                raise ShaLookupError(
                    f"Could not determine whether {file_path} exists", status=e.status
                ) from e
            except requests.RequestException as e:
                if not last_attempt:
                    logger.warning(f"SHA lookup for {file_path} failed ({e}), retrying")
                    continue
                logger.error(f"SHA lookup for {file_path} failed: {e}")
                raise NetworkError(f"Could not reach GitHub to look up {file_path}") from e

            if isinstance(contents, list):
                raise ShaLookupError(f"{file_path} is a directory")

            sha = getattr(contents, "sha", None)
            if not isinstance(sha, str) or not sha:
                raise ShaLookupError(f"No SHA in contents response for {file_path}")
            return sha

        # Unreachable: the final attempt either returns or raises
        raise ShaLookupError(f"Could not determine whether {file_path} exists")

    async def commit_file(
        self,
        file_path: str,
        content: str,
        commit_message: str,
        access_token: str,
    ) -> CommitResult:
        """
        Create or update file_path with content.

        Args:
            file_path: Path in repository (e.g., "posts/hello-world.md")
            content: UTF-8 text; base64-encoded by PyGithub for the PUT
            commit_message: Commit message
            access_token: User's OAuth token

        Returns:
            CommitResult (commit_sha is None if the response body was unreadable)

        Raises:
            ShaLookupError: Phase 1 failed; no write was attempted
            CommitConflictError: GitHub rejected the SHA (409/422)
            CommitError: Any other non-2xx write response
            NetworkError: Transport failure
        """
        repo = self._repo(access_token)
        sha = await self._lookup(repo, file_path)
        kwargs = {"branch": self.branch} if self.branch else {}

        try:
            if sha is None:
                result = await asyncio.to_thread(
                    repo.create_file, file_path, commit_message, content, **kwargs
                )
            else:
                result = await asyncio.to_thread(
                    repo.update_file, file_path, commit_message, content, sha, **kwargs
                )
        except GithubException as e:
            logger.error(
                f"GitHub commit failed ({e.status}) for {file_path} in "
                f"{self.repository.full_name}"
            )
            if e.status in CONFLICT_STATUSES:
                raise CommitConflictError(
                    f"{file_path} changed since it was read", status=e.status
                ) from e
            raise CommitError(f"Failed to commit {file_path}", status=e.status) from e
        except requests.RequestException as e:
            logger.error(f"GitHub commit transport error for {file_path}: {e}")
            raise NetworkError(f"Could not reach GitHub to commit {file_path}") from e
        except (ValueError, KeyError, TypeError) as e:
            # 2xx with a body PyGithub cannot read: the write has landed
            logger.warning(f"Committed {file_path} but could not parse response: {e}")
            return CommitResult(path=file_path, created=sha is None)

        commit_sha = None
        try:
            commit_sha = result["commit"].sha
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Committed {file_path} but response has no commit SHA: {e}")

        logger.info(
            f"Successfully committed '{file_path}' to {self.repository.full_name}"
            f" ({'created' if sha is None else 'updated'})"
        )
        return CommitResult(path=file_path, created=sha is None, commit_sha=commit_sha)
