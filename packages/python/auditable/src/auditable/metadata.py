"""Decoding of the opaque metadata string declared on a wrapped call."""

from __future__ import annotations

import json
from typing import Any

from audit_common import RAW_METADATA_KEY


def decode_metadata(raw: str | None) -> dict[str, Any] | None:
    """Parse *raw* as a JSON object; anything else is kept as ``{"raw": raw}``."""
    if raw is None or not raw.strip():
        return None
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return {RAW_METADATA_KEY: raw}
    if not isinstance(parsed, dict):
        return {RAW_METADATA_KEY: raw}
    return parsed
