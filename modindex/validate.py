"""Field validators and formatting of validation failures."""

from __future__ import annotations

import re
import string
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlsplit

RE_URL_SAFE = re.compile(r'[a-zA-Z0-9!@$()`.+,_"-]*')
_SCHEME = re.compile(r"[a-zA-Z][a-zA-Z0-9+.\-]*")
_SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp"}


class ValidationError(ValueError):
    """A single validation failure identified by its code."""

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code


def is_url_safe(value: str) -> bool:
    """True if the value only holds URL-safe characters."""
    return RE_URL_SAFE.fullmatch(value) is not None


def validation_errors_to_string(errors: Mapping[Any, Any], adder: str | None = None) -> str:
    """Describe the first validation failure found in ``errors``.

    ``errors`` maps a field name to one of: a list of ValidationError (field
    errors), a mapping of field names (nested struct errors), or a mapping of
    integer indices to nested errors (list errors).
    """
    if not errors:
        return ""
    field = next(iter(errors))
    error = errors[field]

    if isinstance(error, Mapping):
        if error and all(isinstance(key, int) for key in error):
            index = min(error)
            return validation_errors_to_string(
                error[index], f"of list {field} with index {index}"
            )
        return validation_errors_to_string(error, f"of item {field}")

    first = next(iter(error), None)
    if first is None:
        return ""
    if adder is not None:
        return f"Field {field} {adder} failed validation with error: {first.code}"
    return f"Field {field} failed validation with error: {first.code}"


def _dependency_key(dependency: Any) -> str:
    version_id = getattr(dependency, "version_id", None)
    project_id = getattr(dependency, "project_id", None)
    file_name = getattr(dependency, "file_name", None)
    return "{}-{}-{}".format(
        version_id if version_id is not None else 0,
        project_id if project_id is not None else 0,
        file_name or "",
    )


def validate_deps(values: Iterable[Any]) -> list[Any]:
    """Reject a dependency list that holds the same dependency twice."""
    items = list(values)
    seen: set[str] = set()
    for dependency in items:
        key = _dependency_key(dependency)
        if key in seen:
            raise ValidationError("duplicate dependency")
        seen.add(key)
    return items


def validate_url(value: str) -> str:
    """Require an absolute https URL."""
    try:
        parts = urlsplit(value)
    except ValueError:
        raise ValidationError("invalid URL") from None
    if not parts.scheme or _SCHEME.fullmatch(parts.scheme) is None:
        raise ValidationError("invalid URL")
    if parts.scheme.lower() in _SPECIAL_SCHEMES and not parts.hostname:
        raise ValidationError("invalid URL")
    if parts.scheme.lower() != "https":
        raise ValidationError("URL must be https")
    return value


def validate_name(value: str) -> str:
    """Reject names made only of whitespace."""
    if not value.strip(string.whitespace + "\u00a0\u2000\u2001\u2002\u2003\u3000"):
        raise ValidationError("Name cannot contain only whitespace.")
    return value