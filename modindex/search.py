"""Project search against a MeiliSearch server."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

import httpx

INVALID_INPUT = "invalid_input"
MEILISEARCH_ERROR = "meilisearch_error"
ENVIRONMENT_ERROR = "environment_error"

_UINT = re.compile(r"\+?[0-9]+")
_UINT_LIMIT = 2**64
_MAX_LIMIT = 100

_SORTS = {
    "relevance": ("projects", "downloads:desc"),
    "downloads": ("projects_filtered", "downloads:desc"),
    "follows": ("projects", "follows:desc"),
    "updated": ("projects", "date_modified:desc"),
    "newest": ("projects", "date_created:desc"),
}


class SearchError(Exception):
    """A search request that could not be served.

    ``error`` is the short error name sent to clients and ``status_code`` the
    HTTP status that goes with it.
    """

    def __init__(self, message: str, error: str = INVALID_INPUT) -> None:
        super().__init__(message)
        self.error = error
        self.status_code = 500 if error == ENVIRONMENT_ERROR else 400


@dataclass(frozen=True)
class SearchConfig:
    """Where the search server lives and the key used to reach it."""

    address: str
    key: str

    def make_client(self) -> httpx.Client:
        """Return an HTTP client bound to the search server; the caller closes it."""
        headers = {"Authorization": f"Bearer {self.key}"} if self.key else {}
        return httpx.Client(base_url=self.address, headers=headers)


@dataclass(kw_only=True)
class SearchRequest:
    """Query parameters of a project search, all as received."""

    query: str | None = None
    offset: str | None = None
    index: str | None = None
    limit: str | None = None
    new_filters: str | None = None
    facets: str | None = None
    filters: str | None = None
    version: str | None = None


@dataclass(kw_only=True)
class UploadSearchProject:
    """A project document uploaded to the search indices."""

    project_id: str
    project_type: str
    slug: str | None = None
    author: str
    title: str
    description: str
    categories: list[str] = field(default_factory=list)
    display_categories: list[str] = field(default_factory=list)
    versions: list[str] = field(default_factory=list)
    follows: int
    downloads: int
    icon_url: str
    latest_version: str
    license: str
    client_side: str
    server_side: str
    gallery: list[str] = field(default_factory=list)
    featured_gallery: str | None = None
    date_created: datetime
    created_timestamp: int
    date_modified: datetime
    modified_timestamp: int
    open_source: bool
    color: int | None = None


@dataclass(kw_only=True)
class ResultSearchProject:
    """A project as returned in search results."""

    project_id: str
    project_type: str
    slug: str | None = None
    author: str
    title: str
    description: str
    categories: list[str]
    display_categories: list[str]
    versions: list[str]
    downloads: int
    follows: int
    icon_url: str
    date_created: str
    date_modified: str
    latest_version: str
    license: str
    client_side: str
    server_side: str
    gallery: list[str]
    featured_gallery: str | None = None
    color: int | None = None


_OPTIONAL_RESULT_FIELDS = frozenset({"slug", "featured_gallery", "color"})


@dataclass
class SearchResults:
    """One page of search results."""

    hits: list[ResultSearchProject]
    offset: int
    limit: int
    total_hits: int


def _parse_uint(text: str) -> int:
    if _UINT.fullmatch(text) is None:
        raise SearchError(f"Error while parsing an integer: invalid digit found in string: {text}")
    value = int(text)
    if value >= _UINT_LIMIT:
        raise SearchError(
            "Error while parsing an integer: number too large to fit in target type"
        )
    return value


def resolve_sort(index: str) -> tuple[str, list[str]]:
    """Return the index name and sort order for a sort option."""
    try:
        name, sort = _SORTS[index]
    except KeyError:
        raise SearchError(f"Invalid index to sort by: {index}") from None
    return name, [sort]


def _parse_facets(raw: str) -> list[list[str]]:
    try:
        facets = json.loads(raw)
    except ValueError as exc:
        raise SearchError(f"Error while serializing or deserializing JSON: {exc}") from exc
    if not isinstance(facets, list) or not all(
        isinstance(group, list) and all(isinstance(item, str) for item in group)
        for group in facets
    ):
        raise SearchError(
            "Error while serializing or deserializing JSON: expected a list of lists of strings"
        )
    return facets


def build_filter(
    facets: list[list[str]] | None, filters: str | None, version: str | None
) -> str:
    """Combine facet groups, a filter expression and a version filter into one filter."""
    if filters is not None and version is not None:
        combined = f"({filters}) AND ({version})"
    else:
        combined = filters if filters is not None else (version or "")

    if facets is None:
        return combined

    groups = " AND ".join(
        "(" + " OR ".join(facet.replace(":", " = ") for facet in group) + ")"
        for group in facets
    )
    result = f"({groups})"
    if combined:
        result += f" AND ({combined})"
    return result


def build_search_params(info: SearchRequest) -> tuple[str, dict[str, Any]]:
    """Return the index to search and the search request body for ``info``."""
    offset = _parse_uint(info.offset if info.offset is not None else "0")
    index = info.index if info.index is not None else "relevance"
    limit = _parse_uint(info.limit if info.limit is not None else "10")
    index_name, sort = resolve_sort(index)

    body: dict[str, Any] = {
        "q": info.query or "",
        "offset": offset,
        "limit": min(_MAX_LIMIT, limit),
        "sort": sort,
    }

    if info.new_filters is not None:
        body["filter"] = info.new_filters
    else:
        facets = _parse_facets(info.facets) if info.facets is not None else None
        filter_string = build_filter(facets, info.filters, info.version)
        if filter_string:
            body["filter"] = filter_string

    return index_name, body


def _request(client: httpx.Client, method: str, path: str, **kwargs: Any) -> Any:
    try:
        response = client.request(method, path, **kwargs)
    except httpx.HTTPError as exc:
        raise SearchError(f"MeiliSearch Error: {exc}", MEILISEARCH_ERROR) from exc
    if response.is_error:
        try:
            message = response.json().get("message", response.text)
        except (ValueError, AttributeError):
            message = response.text
        raise SearchError(f"MeiliSearch Error: {message}", MEILISEARCH_ERROR)
    try:
        return response.json()
    except ValueError as exc:
        raise SearchError(f"MeiliSearch Error: {exc}", MEILISEARCH_ERROR) from exc


def _result_from_hit(hit: Any) -> ResultSearchProject:
    if not isinstance(hit, dict):
        raise SearchError("MeiliSearch Error: search hit is not an object", MEILISEARCH_ERROR)
    values: dict[str, Any] = {}
    for item in fields(ResultSearchProject):
        if item.name in hit:
            values[item.name] = hit[item.name]
        elif item.name not in _OPTIONAL_RESULT_FIELDS:
            raise SearchError(
                f"MeiliSearch Error: missing field `{item.name}`", MEILISEARCH_ERROR
            )
    return ResultSearchProject(**values)


def search_for_project(info: SearchRequest, config: SearchConfig) -> SearchResults:
    """Run a project search and return one page of results."""
    index_name, body = build_search_params(info)
    with config.make_client() as client:
        _request(client, "GET", f"/indexes/{index_name}")
        data = _request(client, "POST", f"/indexes/{index_name}/search", json=body)

    if not isinstance(data, dict):
        raise SearchError("MeiliSearch Error: unexpected search response", MEILISEARCH_ERROR)
    return SearchResults(
        hits=[_result_from_hit(hit) for hit in data.get("hits") or []],
        offset=data.get("offset") or 0,
        limit=data.get("limit") or 0,
        total_hits=data.get("estimatedTotalHits") or 0,
    )