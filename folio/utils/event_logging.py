"""
Pipeline event logging utilities for FOLIO (Tier 2 logging).

Appends portfolio pipeline events (previews published or rejected, template
changes) to a JSON Lines log for cross-context auditing.

For detailed within-context logging (Tier 1), use folio.utils.logger instead.

Usage:
    from folio.utils.event_logging import log_pipeline_event, get_recent_events

    log_pipeline_event(
        event_type="preview_published",
        portfolio="jane-doe",
        source="portfolio",
        template="minimal-dark",
    )

    events = get_recent_events(5, portfolio="jane-doe")
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from folio.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PIPELINE_EVENTS_FILE = Path(
    os.getenv("PIPELINE_EVENTS_FILE", str(LOGS_PATH / "portfolio_pipeline_events.log"))
)


def log_pipeline_event(event_type: str, portfolio: str, source: str, **extra_fields) -> None:
    """
    Log an event to the pipeline event log.

    Events are appended in JSON Lines format (one JSON object per line), which
    keeps the log streamable and easy to filter by event_type, portfolio, or source.

    Args:
        event_type: Type of event (e.g., "preview_published", "preview_rejected")
        portfolio: Portfolio identifier (slug)
        source: Event source (e.g., "portfolio", "cli")
        **extra_fields: Additional event-specific fields

    Example:
        log_pipeline_event(
            event_type="preview_rejected",
            portfolio="jane-doe",
            source="portfolio",
            errors=["eval() is not allowed"],
        )
    """
    PIPELINE_EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "portfolio": portfolio,
        "source": source,
        **extra_fields,
    }

    with open(PIPELINE_EVENTS_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def get_recent_events(
    n: int = 10, portfolio: Optional[str] = None, event_type: Optional[str] = None
) -> list[dict]:
    """
    Get the last n events from the pipeline log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        portfolio: Filter to only events for this portfolio (optional)
        event_type: Filter to only events of this type (optional)

    Returns:
        List of event dicts (most recent last)
    """
    if not PIPELINE_EVENTS_FILE.exists():
        return []

    events = []
    with open(PIPELINE_EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if portfolio:
        events = [e for e in events if e.get("portfolio") == portfolio]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
