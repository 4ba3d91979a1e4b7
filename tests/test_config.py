"""
Unit Tests for settings and the view cache
"""

import pytest

from gitpress.config import Settings
from gitpress.errors import ConfigurationError
from gitpress.integrations.github import RepositoryRef
from gitpress.services.view_cache import ViewCache


def make_settings(**overrides) -> Settings:
    # _env_file=None keeps a developer's .env out of the tests
    return Settings(_env_file=None, **overrides)


def test_defaults():
    settings = make_settings()
    assert settings.posts_path == "posts"
    assert settings.session_ttl_seconds == 7 * 24 * 60 * 60
    assert settings.github_oauth_scopes == "repo read:user"


def test_callback_url_from_public_base_url():
    settings = make_settings(public_base_url="https://blog.example.com/")
    assert settings.callback_url == "https://blog.example.com/api/auth/github/callback"


def test_missing_values_name_the_variables(monkeypatch):
    for name in ("GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET", "GITHUB_REPO_OWNER", "AUTH_SECRET"):
        monkeypatch.delenv(name, raising=False)
    settings = make_settings(github_repo_name="blog")

    with pytest.raises(ConfigurationError, match="GITHUB_CLIENT_ID, GITHUB_CLIENT_SECRET"):
        settings.oauth_credentials()
    with pytest.raises(ConfigurationError, match="GITHUB_REPO_OWNER"):
        settings.repository()
    with pytest.raises(ConfigurationError, match="AUTH_SECRET"):
        settings.session_secret()


def test_values_read_from_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_REPO_OWNER", "octo")
    monkeypatch.setenv("GITHUB_REPO_NAME", "blog")
    monkeypatch.setenv("GITHUB_POSTS_PATH", "/content/posts/")

    settings = make_settings()

    assert settings.repository() == RepositoryRef(owner="octo", name="blog")
    assert settings.repository().full_name == "octo/blog"
    assert settings.posts_path == "content/posts"


def test_view_cache_builds_once_and_invalidates_idempotently():
    cache = ViewCache()
    builds = []

    def build():
        builds.append(1)
        return ["post"]

    assert cache.get_or_build("/posts", build) == ["post"]
    assert cache.get_or_build("/posts", build) == ["post"]
    assert len(builds) == 1

    cache.invalidate("/posts")
    cache.invalidate("/posts")
    cache.invalidate("/never-cached")
    assert "/posts" not in cache

    cache.get_or_build("/posts", build)
    assert len(builds) == 2


def test_view_cache_does_not_store_missing_values():
    cache = ViewCache()
    assert cache.get_or_build("/posts/missing", lambda: None) is None
    assert "/posts/missing" not in cache
