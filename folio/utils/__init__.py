"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logger setup with provenance
- Pipeline event logging
- Timestamps
- Text helpers (slugs, display truncation)
"""

from folio.utils.text_processing import slugify, truncate_display
from folio.utils.timestamp import now, now_exact

__all__ = ["now", "now_exact", "slugify", "truncate_display"]
