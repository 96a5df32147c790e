# modindex

The request-independent core of a mod hosting backend, as plain Python
functions and dataclasses:

- **Search** – `modindex.search` turns a `SearchRequest` into a MeiliSearch
  query (index, sort order, offset, limit capped at 100, and a filter built
  from facets, filters and a version filter) and runs it with
  `search_for_project`. Bad input raises `SearchError`, which carries the
  client error name and HTTP status.
- **Search documents** – `modindex.local_import` turns stored project rows
  (`ProjectRow`) into `UploadSearchProject` documents with `index_local`,
  including display categories, the latest version and whether the licence is
  OSI approved.
- **Version listing** – `modindex.version_listing` applies offset, limit and
  type, loader and game-version filters to a project's versions
  (`filter_versions`) and picks the versions to return, newest first, with
  auto-featuring when no version is featured (`select_listed_versions`).
- **Version editing** – `modindex.version_edit` validates an `EditVersion`,
  works out a user's `Permissions` (`edit_permissions`, `check_edit_allowed`)
  and computes the signed change in downloads (`downloads_difference`).
- **Modpack dependencies** – `modindex.pack_dependencies` derives embedded
  dependencies from the files listed in a pack (`pack_dependencies`).
- **Release webhooks** – `modindex.webhook` builds a Discord embed for a
  release, including a compact rendering of supported game version ranges
  (`get_gv_range`), and posts it with `send_discord_webhook`.
- **Utilities** – environment variables (`modindex.env`), content types
  (`modindex.ext`), the admin key check (`modindex.guards`) and input
  validation (`modindex.validate`).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Content types for uploaded files:

```python
from modindex.ext import get_image_content_type, project_file_type

get_image_content_type("png")   # "image/png"
project_file_type("jar")        # "application/java-archive"
project_file_type("exe")        # None
```

Validation helpers raise `modindex.validate.ValidationError` on bad input:

```python
from modindex.validate import ValidationError, validate_name, validate_url

validate_name("My Test mod")      # returns the name
try:
    validate_url("http://example.com")
except ValidationError as err:
    print(err.code)               # "URL must be https"
```

Building a search query without sending it:

```python
from modindex.search import SearchRequest, build_search_params

index, body = build_search_params(
    SearchRequest(query="sodium", facets='[["categories:fabric"]]')
)
# index == "projects"
# body == {"q": "sodium", "offset": 0, "limit": 10,
#          "sort": ["downloads:desc"], "filter": "((categories = fabric))"}
```

Edit permissions:

```python
from modindex.version_edit import Permissions, check_edit_allowed, edit_permissions

perms = edit_permissions(is_admin=False, is_mod=True, member_permissions=None)
# Permissions.EDIT_DETAILS | Permissions.EDIT_BODY
check_edit_allowed(perms)         # raises PermissionError: no UPLOAD_VERSION
```

Embedded dependencies of a modpack:

```python
from modindex.pack_dependencies import PackFile, pack_dependencies

pack_dependencies(
    [
        PackFile(hashes={"sha1": "abc"}),
        PackFile(downloads=("https://cdn.example.com/a/b/mod.jar",)),
    ],
    known_hashes={"abc": (1, 2)},
    extra_files=["config/options.txt"],
)
# [DependencyBuilder(project_id=1, version_id=2, ...),
#  DependencyBuilder(file_name="mod.jar", ...),
#  DependencyBuilder(file_name="config/options.txt", ...)]
```

## Configuration

Settings are read from environment variables:

| Variable             | Used by           | Meaning                                         |
|----------------------|-------------------|-------------------------------------------------|
| `LABRINTH_ADMIN_KEY` | `admin_key_guard` | Key that the `Modrinth-Admin` header must match |
| `SITE_URL`           | `build_embed`     | Base address used for links in release messages |

## What this package does not do

It is a library only: it has no command, no HTTP server and no storage.
Project rows, versions, game versions and known file hashes are passed in by
the caller. It does not fetch or store the list of game versions, does not
create search indices or upload documents to them, and does not read
uploaded request bodies or store uploaded files.