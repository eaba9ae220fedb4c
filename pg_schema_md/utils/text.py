"""Text helpers shared by the catalog reader and the renderer."""

from typing import Optional

LINE_BREAK = "<br>"


def normalize_description(text: Optional[str]) -> str:
    """Collapse a catalog comment onto one line.

    Every newline (``\\r\\n``, ``\\n`` or a lone ``\\r``) is replaced with
    ``<br>`` so the text fits in a single markdown table row. ``None`` becomes
    an empty string. Applying it twice gives the same result.
    """
    if not text:
        return ""
    text = text.replace("\r\n", LINE_BREAK)
    text = text.replace("\n", LINE_BREAK)
    return text.replace("\r", LINE_BREAK)


def coalesce(value: object) -> str:
    """Convert a catalog cell to text, mapping NULL to an empty string."""
    if value is None:
        return ""
    return str(value)
