"""Request guard that admits callers presenting the admin key."""

from __future__ import annotations

import os
from collections.abc import Mapping

ADMIN_KEY_HEADER = "Modrinth-Admin"
ADMIN_KEY_VAR = "LABRINTH_ADMIN_KEY"


def _as_bytes(value: str | bytes) -> bytes:
    return value if isinstance(value, bytes) else value.encode("utf-8")


def admin_key_guard(headers: Mapping[str, str | bytes]) -> bool:
    """True if the admin key header matches the configured admin key.

    Raises RuntimeError when no admin key is configured.
    """
    admin_key = os.environ.get(ADMIN_KEY_VAR)
    if admin_key is None:
        raise RuntimeError("No admin key provided, set " + ADMIN_KEY_VAR)
    wanted = ADMIN_KEY_HEADER.lower()
    for name, value in headers.items():
        if name.lower() == wanted:
            return _as_bytes(value) == admin_key.encode("utf-8")
    return False