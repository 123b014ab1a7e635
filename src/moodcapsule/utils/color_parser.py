"""Color parsing utilities."""

import re
from typing import Union

from moodcapsule.domain.entities import EntryColor

HEX_COLOR = re.compile(r"^#?([0-9a-f]{6}|[0-9a-f]{3})$")


def parse_color(color_str: str) -> Union[EntryColor, str]:
    """Parse a color string into a palette tag or a hex color value.

    Handles:
    - Palette names: "red", "Blue", ...
    - Hex colors: "#ff8800", "ff8800", "#f80"

    Args:
        color_str: Color string

    Returns:
        EntryColor for palette names, otherwise a lowercase "#rrggbb" string

    Raises:
        ValueError: If color string cannot be parsed
    """
    if not color_str or not color_str.strip():
        raise ValueError("Empty color string")

    color_str = color_str.strip().lower()

    try:
        return EntryColor(color_str)
    except ValueError:
        pass

    match = HEX_COLOR.match(color_str)
    if match is None:
        palette = ", ".join(c.value for c in EntryColor)
        raise ValueError(f"Could not parse color '{color_str}' (use one of {palette} or #rrggbb)")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"
