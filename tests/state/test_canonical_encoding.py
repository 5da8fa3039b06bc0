# [TESTER] v1

from __future__ import annotations

import hashlib

import pytest

from pairswap.state.canonical import canonical_json_bytes, domain_sep_bytes, sha256_hex


def test_key_order_does_not_matter() -> None:
    assert canonical_json_bytes({"b": 1, "a": [2, 3]}) == b'{"a":[2,3],"b":1}'
    assert canonical_json_bytes({"a": [2, 3], "b": 1}) == canonical_json_bytes({"b": 1, "a": [2, 3]})


def test_big_ints_are_exact() -> None:
    assert canonical_json_bytes({"k": 10**40}) == b'{"k":' + str(10**40).encode() + b"}"


@pytest.mark.parametrize("value", [1.5, {"x": 0.1}, [1, [2.0]]])
def test_floats_rejected(value) -> None:
    with pytest.raises(TypeError, match="floats"):
        canonical_json_bytes(value)


def test_non_str_keys_rejected() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({1: "a"})


def test_domain_separator() -> None:
    assert domain_sep_bytes("pool_snapshot", version=1) == b"pairswap:pool_snapshot:v1\x00"
    with pytest.raises(ValueError):
        domain_sep_bytes("")
    with pytest.raises(ValueError):
        domain_sep_bytes("x", version=0)


def test_sha256_hex() -> None:
    assert sha256_hex(b"abc") == hashlib.sha256(b"abc").hexdigest()
