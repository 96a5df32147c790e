"""Dependencies recorded for the files bundled in a modpack."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

EMBEDDED = "embedded"
SHA1 = "sha1"


@dataclass(frozen=True)
class DependencyBuilder:
    """A dependency of a version, by project and version id or by file name."""

    project_id: int | None = None
    version_id: int | None = None
    file_name: str | None = None
    dependency_type: str = EMBEDDED


@dataclass(frozen=True)
class PackFile:
    """A file listed in a pack's index, with its hashes and download URLs."""

    hashes: Mapping[str, str] = field(default_factory=dict)
    downloads: tuple[str, ...] = ()


def download_file_name(url: str) -> str:
    """Return the last path segment of a download URL."""
    return url.rsplit("/", 1)[-1]


def pack_dependencies(
    pack_files: Iterable[PackFile],
    known_hashes: Mapping[str, tuple[int, int]],
    extra_files: Iterable[str] = (),
) -> list[DependencyBuilder]:
    """Build embedded dependencies for a pack's files.

    ``known_hashes`` maps the sha1 of an already hosted file to its project id
    and version id. Files found there depend on that version; others depend on
    the file name of their first download, and files without downloads are
    left out. Each non-empty name in ``extra_files`` is added last.
    """
    dependencies: list[DependencyBuilder] = []
    for pack_file in pack_files:
        sha1 = pack_file.hashes.get(SHA1)
        known = known_hashes.get(sha1) if sha1 is not None else None
        if known is not None:
            project_id, version_id = known
            dependencies.append(
                DependencyBuilder(project_id=project_id, version_id=version_id)
            )
        elif pack_file.downloads:
            dependencies.append(
                DependencyBuilder(file_name=download_file_name(pack_file.downloads[0]))
            )

    dependencies.extend(
        DependencyBuilder(file_name=name) for name in extra_files if name
    )
    return dependencies