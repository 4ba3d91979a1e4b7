"""
Unit Tests for the filesystem post store
"""

import os

from gitpress.services.post_store import PostStore


def write(path, text, mtime=None):
    path.write_text(text, encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))


def test_list_posts_newest_first(tmp_path):
    write(tmp_path / "old.md", "---\ntitle: Old\ndate: 2023-01-01T00:00:00.000Z\n---\nold")
    write(
        tmp_path / "new.md",
        "---\ntitle: New\ndate: '2024-02-02T00:00:00.000Z'\nexcerpt: Fresh\n---\nnew",
    )
    write(tmp_path / "notes.txt", "ignored")

    posts = PostStore(tmp_path).list_posts()

    assert [post.slug for post in posts] == ["new", "old"]
    assert posts[0].excerpt == "Fresh"
    assert posts[1].date == "2023-01-01T00:00:00.000Z"


def test_defaults_for_missing_front_matter(tmp_path):
    write(tmp_path / "bare.mdx", "Just a body", mtime=0)

    post = PostStore(tmp_path).get_post("bare")

    assert post.title == "Untitled Post"
    assert post.date == "1970-01-01T00:00:00.000Z"
    assert post.excerpt == ""
    assert post.content == "Just a body"


def test_get_post_returns_body(tmp_path):
    write(tmp_path / "hello-world.md", "---\ntitle: Hello World\nslug: hello-world\n---\n\nHi there")

    post = PostStore(tmp_path).get_post("hello-world")

    assert post.title == "Hello World"
    assert post.content == "Hi there"


def test_get_post_unknown_or_malformed_slug(tmp_path):
    (tmp_path / "sub").mkdir()
    write(tmp_path / "secret.md", "---\ntitle: Secret\n---\n")
    store = PostStore(tmp_path / "sub")

    assert store.get_post("missing") is None
    assert store.get_post("../secret") is None


def test_missing_directory_lists_nothing(tmp_path):
    store = PostStore(tmp_path / "absent")
    assert store.list_posts() == []
    assert store.list_slugs() == []


def test_list_slugs(tmp_path):
    write(tmp_path / "b.md", "b")
    write(tmp_path / "a.mdx", "a")
    assert PostStore(tmp_path).list_slugs() == ["a", "b"]


def test_dates_are_normalized_before_sorting(tmp_path):
    # Lexicographically "+05:00" would sort after the later "Z" timestamp
    write(tmp_path / "offset.md", "---\ntitle: Offset\ndate: '2024-03-01T03:00:00+05:00'\n---\n")
    write(tmp_path / "utc.md", "---\ntitle: UTC\ndate: '2024-02-29T23:00:00Z'\n---\n")
    write(tmp_path / "day.md", "---\ntitle: Day\ndate: 2024-02-29\n---\n")

    posts = PostStore(tmp_path).list_posts()

    assert [post.slug for post in posts] == ["utc", "offset", "day"]
    assert posts[0].date == "2024-02-29T23:00:00.000Z"
    assert posts[1].date == "2024-02-29T22:00:00.000Z"
    assert posts[2].date == "2024-02-29T00:00:00.000Z"


def test_unparseable_date_falls_back_to_mtime(tmp_path):
    write(tmp_path / "vague.md", "---\ntitle: Vague\ndate: sometime in spring\n---\n", mtime=0)

    post = PostStore(tmp_path).get_post("vague")

    assert post.date == "1970-01-01T00:00:00.000Z"
