#!/usr/bin/env python3
"""
SHA-256 identity of clipboard payloads.

Used only for diagnostics: two captures with the same digest carried the
same bytes, which is easier to spot in a debug log than the content.
"""
import hashlib


def compute_hash(data: bytes) -> str:
    """
    Compute SHA-256 hash of clipboard content.

    Args:
        data: Raw clipboard content bytes to hash.

    Returns:
        Hexadecimal string representation of the SHA-256 digest.
    """
    return hashlib.sha256(data).hexdigest()
