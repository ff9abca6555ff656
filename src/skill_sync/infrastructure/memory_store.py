"""In-memory skill store — implements the SkillStore port.

Stands in for the relational store.  Writes are plain field overwrites
(last write wins); there is no locking between concurrent resyncs.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from skill_sync.domain.entities import SkillPatch, SkillRecord
from skill_sync.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class InMemorySkillStore:
    """Dict-backed store, optionally seeded from a JSON file.

    The seed file is either a list of skill objects or an object with a
    ``skills`` list and a ``practice_links`` mapping of skill id → number of
    listed practices.
    """

    def __init__(
        self,
        skills: list[SkillRecord] | None = None,
        practice_links: dict[int, int] | None = None,
    ) -> None:
        self._skills: dict[int, SkillRecord] = {s.id: s for s in skills or []}
        self._practice_links: dict[int, int] = dict(practice_links or {})

    @classmethod
    def from_json_file(cls, path: Path) -> InMemorySkillStore:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(raw, list):
            raw = {"skills": raw}
        skills = [SkillRecord.from_dict(row) for row in raw.get("skills", [])]
        links = {int(k): int(v) for k, v in (raw.get("practice_links") or {}).items()}
        logger.info("Loaded %d skills from %s", len(skills), path)
        return cls(skills, links)

    async def get(self, skill_id: int) -> SkillRecord | None:
        return self._skills.get(skill_id)

    async def patch(self, skill_id: int, patch: SkillPatch) -> SkillRecord:
        current = self._skills.get(skill_id)
        if current is None:
            raise PersistenceError(f"Cannot patch missing skill {skill_id}")
        updated = current.apply(patch)
        self._skills[skill_id] = updated
        return updated

    async def count_listed_practices(self, skill_id: int) -> int:
        return self._practice_links.get(skill_id, 0)

    async def increment_download(self, skill_id: int) -> int | None:
        current = self._skills.get(skill_id)
        if current is None:
            return None
        updated = replace(current, download_count=current.download_count + 1)
        self._skills[skill_id] = updated
        return updated.download_count
