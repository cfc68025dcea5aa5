"""Structured output for captured clipboard content.

Each successful negotiation is written to stdout as one compact JSON
object per line with the fields content, content_type, mime_types and
timestamp.
"""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Any

import click

from xclipwatch.transcode import encode_content

if TYPE_CHECKING:
    from xclipwatch.negotiate import ClipboardPayload


def build_record(payload: ClipboardPayload, timestamp: int | None = None) -> dict[str, Any]:
    """Build the output record for a payload.

    Args:
        payload: The negotiated clipboard payload.
        timestamp: Seconds since the epoch; defaults to now. This is the
            capture time, not the X server timestamp used in negotiation.

    Returns:
        Dictionary ready for JSON encoding.
    """
    if timestamp is None:
        timestamp = int(time.time())
    return {
        "content": encode_content(payload.content),
        "content_type": payload.content_type,
        "mime_types": list(payload.mime_types),
        "timestamp": timestamp,
    }


def emit_payload(payload: ClipboardPayload) -> None:
    """Write one JSON line for payload to stdout."""
    click.echo(json.dumps(build_record(payload), separators=(",", ":")))
