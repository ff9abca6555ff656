from __future__ import annotations

import pytest

from skill_sync.domain.exceptions import (
    InvalidHostError,
    InvalidPathError,
    InvalidSourceUrlError,
)
from skill_sync.domain.value_objects import SourceReference


def test_parse_tree_url_extracts_ref_and_path() -> None:
    ref = SourceReference.parse("https://github.com/o/r/tree/main/sub/dir")
    assert ref == SourceReference(owner="o", repo="r", ref="main", path="sub/dir")


def test_parse_blob_url() -> None:
    ref = SourceReference.parse("https://github.com/o/r/blob/v2/docs/SKILL.md")
    assert ref.ref == "v2"
    assert ref.path == "docs/SKILL.md"


def test_parse_repo_url_has_no_ref_or_path() -> None:
    ref = SourceReference.parse("https://github.com/o/r")
    assert ref == SourceReference(owner="o", repo="r", ref=None, path=None)


def test_parse_strips_git_suffix() -> None:
    assert SourceReference.parse("https://github.com/o/r.git").repo == "r"


def test_parse_tolerates_trailing_slash_and_whitespace() -> None:
    ref = SourceReference.parse("  https://github.com/o/r/tree/main/sub/  ")
    assert (ref.owner, ref.repo, ref.ref, ref.path) == ("o", "r", "main", "sub")


def test_parse_tree_without_ref() -> None:
    ref = SourceReference.parse("https://github.com/o/r/tree")
    assert ref.ref is None
    assert ref.path is None


def test_parse_ignores_other_third_segments() -> None:
    ref = SourceReference.parse("https://github.com/o/r/issues/12")
    assert ref.ref is None
    assert ref.path is None


@pytest.mark.parametrize(
    "url",
    [
        "https://gitlab.com/o/r",
        "https://raw.githubusercontent.com/o/r/main/SKILL.md",
        "https://github.com.evil.io/o/r",
        "https://[github.com/o/r",
    ],
)
def test_parse_rejects_other_hosts(url: str) -> None:
    with pytest.raises(InvalidHostError):
        SourceReference.parse(url)


@pytest.mark.parametrize("url", ["https://github.com/ownerOnly", "https://github.com/"])
def test_parse_rejects_short_paths(url: str) -> None:
    with pytest.raises(InvalidPathError):
        SourceReference.parse(url)


def test_parse_errors_share_a_base() -> None:
    with pytest.raises(InvalidSourceUrlError):
        SourceReference.parse("not a url")


def test_dir_name_uses_last_path_segment() -> None:
    assert SourceReference.parse("https://github.com/o/r/tree/main/a/b").dir_name == "b"
    assert SourceReference.parse("https://github.com/o/r").dir_name == "r"
