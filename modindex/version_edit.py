"""Checks applied when a version's metadata is edited."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from modindex.validate import ValidationError, is_url_safe, validate_deps, validate_name, validation_errors_to_string

_I32_MASK = 0xFFFFFFFF
_I32_SIGN = 0x80000000


class Permissions(enum.Flag):
    """What a team member may do with a project."""

    UPLOAD_VERSION = enum.auto()
    DELETE_VERSION = enum.auto()
    EDIT_DETAILS = enum.auto()
    EDIT_BODY = enum.auto()
    ALL = UPLOAD_VERSION | DELETE_VERSION | EDIT_DETAILS | EDIT_BODY


@dataclass(kw_only=True)
class EditVersion:
    """Changes requested for a version; fields left as None are not touched.

    ``primary_file`` is a pair of hash algorithm and hash.
    """

    name: str | None = None
    version_number: str | None = None
    changelog: str | None = None
    version_type: str | None = None
    dependencies: list[Any] | None = None
    game_versions: list[str] | None = None
    loaders: list[str] | None = None
    featured: bool | None = None
    primary_file: tuple[str, str] | None = None
    downloads: int | None = None
    status: str | None = None
    file_types: list[Any] | None = None


def _length_ok(value: Sequence[Any], minimum: int | None, maximum: int | None) -> bool:
    size = len(value)
    if minimum is not None and size < minimum:
        return False
    if maximum is not None and size > maximum:
        return False
    return True


def _field_errors(data: EditVersion) -> dict[str, list[ValidationError]]:
    errors: dict[str, list[ValidationError]] = {}

    def add(field: str, error: ValidationError) -> None:
        errors.setdefault(field, []).append(error)

    if data.name is not None:
        if not _length_ok(data.name, 1, 64):
            add("name", ValidationError("length"))
        try:
            validate_name(data.name)
        except ValidationError as exc:
            add("name", exc)

    if data.version_number is not None:
        if not _length_ok(data.version_number, 1, 32):
            add("version_number", ValidationError("length"))
        if not is_url_safe(data.version_number):
            add("version_number", ValidationError("regex"))

    if data.changelog is not None and not _length_ok(data.changelog, None, 65536):
        add("changelog", ValidationError("length"))

    if data.dependencies is not None:
        if not _length_ok(data.dependencies, 0, 4096):
            add("dependencies", ValidationError("length"))
        try:
            validate_deps(data.dependencies)
        except ValidationError as exc:
            add("dependencies", exc)

    return errors


def validate_edit_version(data: EditVersion) -> EditVersion:
    """Return ``data`` if it is valid; otherwise raise ValidationError describing the first failure."""
    errors = _field_errors(data)
    if errors:
        raise ValidationError(validation_errors_to_string(errors))
    return data


def edit_permissions(
    is_admin: bool, is_mod: bool, member_permissions: Permissions | None
) -> Permissions | None:
    """Return what the editing user may do with the version, or None for nothing."""
    if is_admin:
        return Permissions.ALL
    if member_permissions is not None:
        return member_permissions
    if is_mod:
        return Permissions.EDIT_DETAILS | Permissions.EDIT_BODY
    return None


def check_edit_allowed(permissions: Permissions | None) -> Permissions:
    """Return ``permissions`` if they allow editing; raise PermissionError otherwise."""
    if permissions is None:
        raise PermissionError("You do not have permission to edit this version!")
    if Permissions.UPLOAD_VERSION not in permissions:
        raise PermissionError("You do not have the permissions to edit this version!")
    return permissions


def downloads_difference(new_downloads: int, old_downloads: int) -> int:
    """Return the change in downloads as a signed 32-bit amount."""
    diff = (new_downloads - old_downloads) & _I32_MASK
    return diff - (1 << 32) if diff & _I32_SIGN else diff