"""Selecting the versions of a project to list, with filters and auto-featuring."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from itertools import islice


@dataclass(kw_only=True)
class VersionRecord:
    """A stored version with the data used to filter and order it."""

    id: str
    date_published: datetime
    version_type: str = "release"
    featured: bool = False
    loaders: list[str] = field(default_factory=list)
    game_versions: list[str] = field(default_factory=list)


@dataclass(kw_only=True)
class VersionListFilters:
    """Query filters of a version listing.

    ``game_versions`` and ``loaders`` are JSON arrays of strings as received.
    """

    game_versions: str | None = None
    loaders: str | None = None
    featured: bool | None = None
    version_type: str | None = None
    limit: int | None = None
    offset: int | None = None


def parse_filter_list(value: str | None) -> list[str] | None:
    """Read a JSON array of strings; None stays None and anything unreadable is empty."""
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except ValueError:
        return []
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        return []
    return parsed


def filter_versions(
    versions: Iterable[VersionRecord], filters: VersionListFilters
) -> list[VersionRecord]:
    """Apply offset and limit, then keep the versions matching every given filter."""
    loader_filters = parse_filter_list(filters.loaders)
    version_filters = parse_filter_list(filters.game_versions)

    start = filters.offset or 0
    stop = None if filters.limit is None else start + filters.limit

    def matches(version: VersionRecord) -> bool:
        if filters.version_type is not None and version.version_type != filters.version_type:
            return False
        if loader_filters is not None and not any(
            loader in loader_filters for loader in version.loaders
        ):
            return False
        if version_filters is not None and not any(
            game_version in version_filters for game_version in version.game_versions
        ):
            return False
        return True

    return [version for version in islice(versions, start, stop) if matches(version)]


def _newest_first(versions: Iterable[VersionRecord]) -> list[VersionRecord]:
    return sorted(versions, key=lambda version: version.date_published, reverse=True)


def select_listed_versions(
    versions: Sequence[VersionRecord],
    filters: VersionListFilters,
    game_versions: Sequence[str],
    loaders: Sequence[str],
) -> list[VersionRecord]:
    """Pick the versions to return, newest first and without repeats.

    ``versions`` are the already filtered versions, ``game_versions`` the names
    of the major game versions and ``loaders`` the names of all loaders. When
    featured versions are asked for and none exist, the newest version for each
    pair of major game version and loader is chosen instead, or every version
    if no pair matches.
    """
    response = [
        version
        for version in versions
        if filters.featured is None or version.featured == filters.featured
    ]
    ordered = _newest_first(versions)

    if not response and ordered and filters.featured:
        for game_version in game_versions:
            for loader in loaders:
                found = next(
                    (
                        version
                        for version in ordered
                        if game_version in version.game_versions and loader in version.loaders
                    ),
                    None,
                )
                if found is not None:
                    response.append(found)
        if not response:
            response = list(ordered)

    result: list[VersionRecord] = []
    for version in _newest_first(response):
        if result and result[-1].id == version.id:
            continue
        result.append(version)
    return result