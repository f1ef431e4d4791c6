"""
Text processing utilities for FOLIO.

Small string helpers shared by the portfolio store and CLI output.
"""

import re
import unicodedata

# Characters that survive slugification (after lowercasing and accent folding)
SLUG_INVALID_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(text: str, max_len: int = 64) -> str:
    """
    Convert a title into a URL-safe slug.

    Accents are folded to ASCII, runs of non-alphanumeric characters collapse
    to a single hyphen, and leading/trailing hyphens are stripped.

    Args:
        text: Title or name to convert
        max_len: Maximum slug length (trailing hyphen removed after cutting)

    Returns:
        Slug string (may be empty if text has no alphanumeric characters)

    Example:
        >>> slugify("My Portfolio 2025!")
        "my-portfolio-2025"
        >>> slugify("Café Développeur")
        "cafe-developpeur"
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = SLUG_INVALID_CHARS.sub("-", folded.lower()).strip("-")
    return slug[:max_len].rstrip("-")


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        "short"
        >>> truncate_display("this is a very long string", 10)
        "this is..."
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."
