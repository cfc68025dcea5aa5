#!/usr/bin/env python3
"""
Transport-safe encoding of clipboard payloads.

Clipboard content is arbitrary bytes (images, rich text, ...), while the
output record is text. Payloads are encoded as standard, padded base64,
which is total and lossless: base64-decoding the result reproduces the
input exactly, including the empty payload.
"""
import base64

from xclipwatch.hashing import compute_hash


def encode_content(data: bytes) -> str:
    """
    Encode raw payload bytes as a base64 string.

    Args:
        data: Raw clipboard content bytes.

    Returns:
        Standard-alphabet, padded base64 text.
    """
    return base64.b64encode(data).decode("ascii")


def describe_content(data: bytes) -> str:
    """Return the size and SHA-256 identity of a payload for logging."""
    return f"{len(data)} bytes sha256={compute_hash(data)}"
