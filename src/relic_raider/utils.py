"""Shared utility functions for Relic Raider."""
from __future__ import annotations

import json


def safe_json(value, default=None):
    """Deserialize a JSON string if needed, or return default.

    Handles descriptors that arrive as JSON text, already-decoded objects,
    or None.
    """
    if value is None:
        return default if default is not None else {}
    if isinstance(value, str):
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return default if default is not None else {}
    return value
