"""Archive repackager — cuts one sub-directory out of a repository zip.

Codeload archives wrap everything in a single ``<repo>-<branch>/`` folder.
The repackager keeps only the entries below ``<root>/<target>/`` and re-roots
them under a new top-level directory, so the download unpacks to a folder
named after the skill instead of the whole repository.
"""

from __future__ import annotations

import io
import logging
import posixpath
import zipfile

from skill_sync.domain.entities import RepackagedArchive
from skill_sync.domain.exceptions import EmptyArchiveError, PathNotFoundError

logger = logging.getLogger(__name__)


def normalize_sub_path(target_sub_path: str | None) -> str:
    return (target_sub_path or "").strip("/")


def repackage(
    archive_bytes: bytes,
    target_sub_path: str | None,
    output_dir_name: str,
) -> RepackagedArchive:
    """Return a new archive holding only *target_sub_path*.

    An empty target returns *archive_bytes* untouched.

    Raises :class:`EmptyArchiveError` when the source archive has no entries
    and :class:`PathNotFoundError` when nothing lives under the target.
    """
    try:
        source = zipfile.ZipFile(io.BytesIO(archive_bytes))
    except zipfile.BadZipFile as exc:
        raise EmptyArchiveError(f"Archive is not a readable zip file: {exc}") from exc

    with source:
        entries = source.infolist()
        if not entries:
            raise EmptyArchiveError("Empty zip archive")

        target = normalize_sub_path(target_sub_path)
        if not target:
            return RepackagedArchive(content=archive_bytes, dir_name=output_dir_name)

        root_name = entries[0].filename.split("/", 1)[0]
        prefix = f"{root_name}/{target}/"

        buffer = io.BytesIO()
        seen_dirs: set[str] = set()
        written = 0

        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as out:
            for entry in entries:
                if not entry.filename.startswith(prefix):
                    continue
                relative = entry.filename[len(prefix):]
                if not relative:
                    continue

                new_name = posixpath.join(output_dir_name, relative)
                if entry.is_dir():
                    dir_name = new_name.rstrip("/")
                    if dir_name in seen_dirs:
                        continue
                    seen_dirs.add(dir_name)
                    out.writestr(f"{dir_name}/", b"")
                else:
                    out.writestr(new_name, source.read(entry))
                written += 1

    if not written:
        raise PathNotFoundError(f"Path '{target}' not found in archive")

    logger.debug("Repackaged %d entries under %s/", written, output_dir_name)
    return RepackagedArchive(content=buffer.getvalue(), dir_name=output_dir_name)
