"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any


class RenderMode(str, Enum):
    """Rendering hint stored alongside a fetched document."""

    MARKDOWN = "markdown"
    PLAIN = "plain"


class Provenance(str, Enum):
    """Where the data in a returned record came from."""

    SOURCE = "source"
    CACHE = "cache"


@dataclass(frozen=True, slots=True)
class SkillRecord:
    """A persisted skill row (the subset this service reads and patches)."""

    id: int
    source_url: str
    name: str = ""
    is_package: bool = False
    supports_download_zip: bool = True
    repo_stars: int | None = None
    repo_owner_name: str | None = None
    repo_owner_avatar_url: str | None = None
    updated_at: str | None = None
    markdown: str | None = None
    markdown_render_mode: RenderMode = RenderMode.PLAIN
    heat_score: float = 0.0
    practice_count: int = 0
    download_count: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SkillRecord:
        """Build a record from a store row, ignoring unknown columns."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        mode = values.pop("markdown_render_mode", None)
        if mode is not None:
            values["markdown_render_mode"] = RenderMode(mode)
        return cls(**values)

    def apply(self, patch: SkillPatch) -> SkillRecord:
        return replace(self, **patch.as_fields())


@dataclass(frozen=True, slots=True)
class SkillPatch:
    """Fields overwritten by a successful resync."""

    repo_stars: int
    repo_owner_name: str
    repo_owner_avatar_url: str | None
    updated_at: str | None
    markdown: str | None
    markdown_render_mode: RenderMode
    heat_score: float

    def as_fields(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True, slots=True)
class SyncResult:
    """A record plus the provenance of its data.

    ``patch`` is only set when the data was freshly fetched from the source.
    """

    record: SkillRecord
    provenance: Provenance
    patch: SkillPatch | None = None


@dataclass(frozen=True, slots=True)
class RepoInfo:
    """Repository metadata needed for a resync."""

    default_branch: str
    star_count: int
    owner_login: str
    owner_avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class OwnerInfo:
    display_name: str | None = None


@dataclass(frozen=True, slots=True)
class LatestCommit:
    sha: str | None = None
    date: str | None = None


@dataclass(frozen=True, slots=True)
class RepackagedArchive:
    """A zip archive ready to be streamed to the requester."""

    content: bytes
    dir_name: str

    @property
    def filename(self) -> str:
        return f"{self.dir_name}.zip"
