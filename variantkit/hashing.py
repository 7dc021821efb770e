"""Unit hashing: MD5 rendered as unpadded base64url, and 32-bit MurmurHash3."""

from __future__ import annotations

import base64
import hashlib
import struct

_MASK = 0xFFFFFFFF


def md5_base64url(data: bytes) -> bytes:
    """Return the MD5 digest of ``data`` as 22 bytes of unpadded base64url text."""
    digest = hashlib.md5(bytes(data), usedforsecurity=False).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=")


def hash_unit(unit: str) -> bytes:
    """Hash a unit identifier: UTF-8 encode it, then apply :func:`md5_base64url`."""
    return md5_base64url(unit.encode("utf-8"))


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _scramble(block: int) -> int:
    block = (block * 0xCC9E2D51) & _MASK
    block = _rotl(block, 15)
    return (block * 0x1B873593) & _MASK


def _fmix(h: int) -> int:
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h


def murmur3_32(key: bytes, seed: int = 0) -> int:
    """Return the unsigned 32-bit MurmurHash3 (x86 variant) of ``key``."""
    key = bytes(key)
    body = len(key) & ~3
    h = seed & _MASK
    for (block,) in struct.iter_unpack("<I", key[:body]):
        h = _rotl(h ^ _scramble(block), 13)
        h = (h * 5 + 0xE6546B64) & _MASK
    if tail := key[body:]:
        h ^= _scramble(int.from_bytes(tail, "little"))
    h ^= len(key) & _MASK
    return _fmix(h)