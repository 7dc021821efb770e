import base64
import hashlib

import pytest

from variantkit.hashing import hash_unit, md5_base64url, murmur3_32

_ALPHABET = set(b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")


def test_md5_of_empty_input():
    assert md5_base64url(b"") == b"1B2M2Y8AsgTpgAmY7PhCfg"


@pytest.mark.parametrize("data", [b"", b"a", b"123456789", b"x" * 55, b"y" * 64, b"z" * 1000])
def test_md5_decodes_to_digest(data):
    encoded = md5_base64url(data)
    assert len(encoded) == 22
    assert set(encoded) <= _ALPHABET
    assert base64.urlsafe_b64decode(encoded + b"==") == hashlib.md5(data).digest()


@pytest.mark.parametrize("unit", ["123456789", "e791e240fcd3df7d238cfc285f475e8152fcc0ec", "zoë ☃", "a" * 600])
def test_hash_unit_hashes_utf8_bytes(unit):
    result = hash_unit(unit)
    assert len(result) == 22
    assert result == md5_base64url(unit.encode("utf-8"))


def test_hash_unit_distinguishes_units():
    assert hash_unit("123456789") != hash_unit("123456788")


def test_murmur_known_vectors():
    assert murmur3_32(b"", 1) == 0x514E28B7
    assert murmur3_32(b"hello", 0) == 0x248BFA47


@pytest.mark.parametrize("data", [b"", b"a", b"ab", b"abc", b"abcd", b"abcde", b"\xff" * 13])
def test_murmur_is_unsigned_32_bit_and_deterministic(data):
    value = murmur3_32(data, 0)
    assert 0 <= value <= 0xFFFFFFFF
    assert murmur3_32(data, 0) == value
    assert murmur3_32(bytearray(data), 0) == value


def test_murmur_seed_changes_result():
    assert murmur3_32(b"abcdef", 0) != murmur3_32(b"abcdef", 1)


def test_murmur_tail_bytes_matter():
    assert murmur3_32(b"abcde", 0) != murmur3_32(b"abcdf", 0)