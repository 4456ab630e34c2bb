"""Nonce challenge-response used by the device login."""

from __future__ import annotations

import hashlib


def derive_challenge(username: str, nonce: str, password: str) -> str:
    """Return the lowercase hex SHA-256 of ``username:nonce:password``.

    The device recomputes the same digest, so the separator and UTF-8
    encoding must not change. Empty values are hashed as-is.
    """

    blob = f"{username}:{nonce}:{password}".encode("utf-8")
    return hashlib.sha256(blob).hexdigest()
