"""
Shared fixtures: an in-memory stand-in for a PyGithub repository and helpers
for building clients around it.
"""

import hashlib
import itertools
from types import SimpleNamespace
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from github.GithubException import GithubException, UnknownObjectException

from gitpress.integrations.github import ContentCommitter, RepositoryRef


class FakeRepo:
    """Mimics the contents API of github.Repository.Repository."""

    def __init__(self):
        self.files: Dict[str, SimpleNamespace] = {}
        self.calls: List[tuple] = []
        self._commit_ids = itertools.count(1)

    def seed(self, path: str, content: str) -> str:
        sha = self._blob_sha(content)
        self.files[path] = SimpleNamespace(path=path, sha=sha, decoded=content)
        return sha

    @staticmethod
    def _blob_sha(content: str) -> str:
        return hashlib.sha1(content.encode("utf-8")).hexdigest()

    def _commit(self, path: str, content: str):
        self.files[path] = SimpleNamespace(
            path=path, sha=self._blob_sha(content), decoded=content
        )
        return {
            "content": self.files[path],
            "commit": SimpleNamespace(sha=f"commit-{next(self._commit_ids)}"),
        }

    def get_contents(self, path: str, ref: Optional[str] = None):
        self.calls.append(("get_contents", path, ref))
        if path not in self.files:
            raise UnknownObjectException(404, {"message": "Not Found"}, None)
        return self.files[path]

    def create_file(self, path, message, content, branch=None):
        self.calls.append(("create_file", path, message, content, branch))
        if path in self.files:
            raise GithubException(422, {"message": '"sha" wasn\'t supplied.'}, None)
        return self._commit(path, content)

    def update_file(self, path, message, content, sha, branch=None):
        self.calls.append(("update_file", path, message, content, sha, branch))
        current = self.files.get(path)
        if current is None or current.sha != sha:
            raise GithubException(409, {"message": "does not match"}, None)
        return self._commit(path, content)

    def writes(self) -> List[tuple]:
        return [call for call in self.calls if call[0] in ("create_file", "update_file")]


REPOSITORY = RepositoryRef(owner="octo", name="blog")


@pytest.fixture
def fake_repo() -> FakeRepo:
    return FakeRepo()


@pytest.fixture
def github_client(fake_repo):
    client = MagicMock()
    client.get_repo.return_value = fake_repo
    return client


@pytest.fixture
def committer(github_client) -> ContentCommitter:
    return ContentCommitter(REPOSITORY, github_factory=lambda token: github_client)
