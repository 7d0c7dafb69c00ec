"""Scalar-or-array coercion for classification tags (bpml_l1, bpml_l2, ...).

Backends emit tag fields as a bare string, a list of strings, or nothing at
all. Everything downstream sees ``list[str] | None``.
"""

import json
from typing import Any


def stringify(value: Any) -> str:
    """Render one value as text: strings unchanged, everything else as JSON."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(value)


def normalize_tags(value: Any) -> list[str] | None:
    """Coerce a tag field into an ordered list of strings, or None when absent.

    An empty string and an empty list both mean "no tags". List items that are
    not strings are rendered as text rather than dropped. Never raises.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return [value] if value else None
    if isinstance(value, (list, tuple)):
        return [stringify(item) for item in value] or None
    return [stringify(value)]


def is_valid_tags(value: Any) -> bool:
    """True when the tag field carries at least one tag worth rendering."""
    normalized = normalize_tags(value)
    return normalized is not None and len(normalized) >= 1
