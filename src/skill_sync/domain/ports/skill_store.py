"""Port: skill store — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from skill_sync.domain.entities import SkillPatch, SkillRecord


class SkillStore(Protocol):
    """Abstract contract for the persisted skill rows."""

    async def get(self, skill_id: int) -> SkillRecord | None:
        """Return the skill row, or ``None`` when it does not exist."""
        ...

    async def patch(self, skill_id: int, patch: SkillPatch) -> SkillRecord:
        """Overwrite the patch fields and return the stored row.

        Adapters raise :class:`PersistenceError` when the write fails; callers
        also tolerate raw driver errors.
        """
        ...

    async def count_listed_practices(self, skill_id: int) -> int:
        """Return how many listed practices link to the skill."""
        ...

    async def increment_download(self, skill_id: int) -> int | None:
        """Bump the download counter; ``None`` when the skill does not exist."""
        ...
