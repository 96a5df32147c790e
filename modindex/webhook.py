"""Release announcements posted to a Discord webhook."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TypeVar

import httpx

T = TypeVar("T")

SITE_URL_VAR = "SITE_URL"
DEFAULT_COLOR = 0x1BD96A
FOOTER_ICON_URL = "https://cdn-raw.modrinth.com/modrinth-new.png"
WEBHOOK_AVATAR_URL = "https://cdn.modrinth.com/Modrinth_Dark_Logo.png"
WEBHOOK_USERNAME = "Modrinth Release"

PLUGIN_LOADERS = frozenset(
    {"bukkit", "spigot", "paper", "purpur", "bungeecord", "waterfall", "velocity", "sponge"}
)

_LOADER_EMOJIS = {
    "bukkit": 1049793345481883689,
    "bungeecord": 1049793347067314220,
    "fabric": 1049793348719890532,
    "forge": 1049793350498275358,
    "liteloader": 1049793351630733333,
    "minecraft": 1049793352964526100,
    "modloader": 1049793353962762382,
    "paper": 1049793355598540810,
    "purpur": 1049793357351751772,
    "quilt": 1049793857681887342,
    "rift": 1049793359373414502,
    "spigot": 1049793413886779413,
    "sponge": 1049793416969605231,
    "velocity": 1049793419108700170,
    "waterfall": 1049793420937412638,
    "datapack": 1057895494652788866,
}
_UNKNOWN_LOADER_EMOJI = 1049805243866681424

_DISPLAY_PROJECT_TYPES = {"datapack": "data pack", "resourcepack": "resource pack"}

_NOT_FOUND = 1000000


@dataclass(frozen=True)
class GameVersion:
    """A game version known to the site."""

    id: int
    version: str
    type_: str
    created: datetime
    major: bool = False


@dataclass(kw_only=True)
class WebhookProject:
    """The project data that goes into a release announcement."""

    title: str
    description: str
    project_type: str
    username: str
    avatar_url: str | None = None
    icon_url: str | None = None
    slug: str | None = None
    color: int | None = None
    categories: list[str] = field(default_factory=list)
    loaders: list[str] = field(default_factory=list)
    versions: list[GameVersion] = field(default_factory=list)
    gallery: list[str] = field(default_factory=list)
    featured_gallery: list[str] = field(default_factory=list)


def loader_emoji_id(loader: str) -> int:
    """Return the Discord emoji id shown next to a loader."""
    return _LOADER_EMOJIS.get(loader, _UNKNOWN_LOADER_EMOJI)


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _position(items: Iterable[T], matches: Callable[[T], bool]) -> int:
    return next((i for i, item in enumerate(items) if matches(item)), _NOT_FOUND)


def get_gv_range(
    game_versions: Sequence[GameVersion], all_game_versions: Sequence[GameVersion]
) -> str:
    """Describe a set of game versions as ranges, one per line."""
    versions = sorted(game_versions, key=lambda v: v.created)
    everything = sorted(all_game_versions, key=lambda v: v.created)
    releases = [v for v in everything if v.type_ == "release"]

    def index_in_all(name: str) -> int:
        return _position(everything, lambda v: v.version == name)

    def index_in_releases(name: str) -> int:
        return _position(releases, lambda v: v.version == name)

    def index_in_versions(name: str) -> int:
        return _position(versions, lambda v: v.version == name)

    intervals: list[list[list[int]]] = []
    for i, current in enumerate(versions):
        index = index_in_all(current.version)
        release_index = index_in_releases(current.version)
        point = [i, index, release_index]
        if not intervals:
            intervals.append([point])
            continue
        base = intervals[-1]
        adjacent = index - base[-1][1] == 1 or release_index - base[-1][2] == 1
        if adjacent and (
            everything[base[0][1]].type_ == "release" or everything[index].type_ != "release"
        ):
            if len(base) > 1:
                base[1] = point
            else:
                base.insert(1, point)
        else:
            intervals.append([point])

    split: list[list[list[int]]] = []
    for interval in intervals:
        if len(interval) == 2 and interval[0][2] != _NOT_FOUND and interval[1][2] == _NOT_FOUND:
            start, end = interval
            last_snapshot: int | None = None
            for j in range(end[1], start[1], -1):
                candidate = everything[j]
                if candidate.type_ != "release":
                    last_snapshot = j
                    continue
                split.append(
                    [
                        start,
                        [
                            index_in_versions(candidate.version),
                            j,
                            index_in_releases(candidate.version),
                        ],
                    ]
                )
                if last_snapshot is None:
                    split.append([end])
                elif last_snapshot != j + 1:
                    split.append(
                        [
                            [
                                index_in_versions(everything[last_snapshot].version),
                                last_snapshot,
                                _NOT_FOUND,
                            ],
                            end,
                        ]
                    )
                break
        else:
            split.append(interval)

    lines = []
    for interval in split:
        if len(interval) == 2:
            lines.append(
                f"{versions[interval[0][0]].version}—{versions[interval[1][0]].version}"
            )
        else:
            lines.append(versions[interval[0][0]].version)
    return "\n".join(lines)


def _format_loaders(loaders: Iterable[str]) -> str:
    parts = []
    for loader in loaders:
        label = "Data Pack" if loader == "datapack" else loader
        parts.append(f"<:{loader}:{loader_emoji_id(loader)}> {_capitalize_first(label)}\n")
    return "".join(parts)


def _effective_project_type(project: WebhookProject) -> str:
    if all(loader in PLUGIN_LOADERS for loader in project.loaders):
        return "plugin"
    if "datapack" in project.loaders:
        return "datapack"
    return project.project_type


def _rfc3339(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def build_embed(
    project: WebhookProject,
    project_id: str,
    all_game_versions: Sequence[GameVersion],
    site_url: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the embed announcing ``project``.

    ``site_url`` defaults to the SITE_URL variable and ``now`` to the current time.
    """
    if site_url is None:
        site_url = os.environ.get(SITE_URL_VAR, "")
    if now is None:
        now = datetime.now(timezone.utc)

    fields: list[dict[str, Any]] = []
    if project.categories:
        fields.append(
            {
                "name": "Categories",
                "value": "\n".join(_capitalize_first(c) for c in project.categories),
                "inline": True,
            }
        )
    if project.loaders:
        fields.append(
            {"name": "Loaders", "value": _format_loaders(project.loaders), "inline": True}
        )
    if project.versions:
        fields.append(
            {
                "name": "Versions",
                "value": get_gv_range(project.versions, all_game_versions),
                "inline": True,
            }
        )

    project_type = _effective_project_type(project)
    display_type = _DISPLAY_PROJECT_TYPES.get(project_type, project_type)

    images = project.featured_gallery or project.gallery
    color = project.color if project.color is not None else DEFAULT_COLOR

    return {
        "author": {
            "name": project.username,
            "url": f"{site_url}/user/{project.username}",
            "icon_url": project.avatar_url,
        },
        "title": project.title,
        "description": project.description,
        "url": f"{site_url}/{project_type}/{project.slug or project_id}",
        "timestamp": _rfc3339(now),
        "color": color & 0xFFFFFFFF,
        "fields": fields,
        "thumbnail": {"url": project.icon_url},
        "image": {"url": images[0]} if images else None,
        "footer": {
            "text": f"{_capitalize_first(display_type)} on Modrinth",
            "icon_url": FOOTER_ICON_URL,
        },
    }


def build_webhook_payload(embed: dict[str, Any], message: str | None = None) -> dict[str, Any]:
    """Wrap an embed in the webhook message body."""
    return {
        "avatar_url": WEBHOOK_AVATAR_URL,
        "username": WEBHOOK_USERNAME,
        "embeds": [embed],
        "content": message,
    }


def send_discord_webhook(
    project: WebhookProject | None,
    project_id: str,
    all_game_versions: Sequence[GameVersion],
    webhook_url: str,
    message: str | None = None,
) -> None:
    """Post a release announcement for ``project``; nothing is sent when it is None.

    Raises ConnectionError if the request cannot be sent.
    """
    if project is None:
        return
    payload = build_webhook_payload(build_embed(project, project_id, all_game_versions), message)
    try:
        httpx.post(webhook_url, json=payload)
    except httpx.HTTPError as exc:
        raise ConnectionError("Error while sending projects webhook") from exc