"""Label colour normalisation."""

from __future__ import annotations

import string

from github_label_manager.errors import InvalidInput

_HEX_DIGITS = frozenset(string.hexdigits)


def normalize_color(value: str) -> str:
    """Return `value` as a lowercase 6-digit hex colour without a leading `#`.

    Raises:
        InvalidInput if the value is not exactly six hex digits.
    """

    color = value[1:] if value.startswith("#") else value
    if len(color) != 6:
        raise InvalidInput(f"Color must be 6 hex digits (e.g., ff0000), got {value!r}")
    if not all(ch in _HEX_DIGITS for ch in color):
        raise InvalidInput(f"Invalid hex color format: {value!r}")
    return color.lower()
