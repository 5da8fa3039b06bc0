"""
Deterministic canonical encoding primitives.

Used for pool snapshots and their commitments.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


CANONICAL_ENCODING_VERSION = 1


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, dict):
        for k in value.keys():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
        for v in value.values():
            _reject_floats(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)


def canonical_json_bytes(value: Any) -> bytes:
    """
    Canonical JSON encoding for hashing.

    Rules:
    - UTF-8
    - sort_keys=True
    - separators=(',', ':') (no whitespace)
    - allow_nan=False
    - floats rejected (to avoid representation ambiguity)
    """
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def domain_sep_bytes(domain: str, *, version: int = CANONICAL_ENCODING_VERSION) -> bytes:
    """Domain separator prefix: b"pairswap:<domain>:v<version>\\x00"."""
    if not isinstance(domain, str) or not domain:
        raise ValueError("domain must be a non-empty string")
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return f"pairswap:{domain}:v{version}".encode("utf-8") + b"\x00"


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
