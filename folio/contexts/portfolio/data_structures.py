"""
Stored records of the portfolio context.

Rows come back from SQLite as sqlite3.Row; from_row() maps them onto these
dataclasses (booleans are stored as 0/1 integers).
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass
class PortfolioTemplate:
    """
    Reusable component source plus catalog metadata.

    Attributes:
        id: Primary key
        name: Display name
        slug: Unique identifier for URLs
        description: Catalog description
        category: Grouping label (e.g., "developer", "designer")
        thumbnail: Asset-host URL of the preview image (opaque)
        code: Component source rendered by the engine
        published: Visible in the public catalog
        created_at: ISO 8601 timestamp
        updated_at: ISO 8601 timestamp
    """

    id: int
    name: str
    slug: str
    description: str
    category: str
    thumbnail: Optional[str]
    code: str
    published: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PortfolioTemplate":
        return cls(**{**dict(row), "published": bool(row["published"])})


@dataclass
class Portfolio:
    """A user's instance of one template, identified by a per-user slug."""

    id: int
    user_id: str
    template_id: int
    title: str
    slug: str
    published: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Portfolio":
        return cls(**{**dict(row), "published": bool(row["published"])})


@dataclass
class Customization:
    """One field override for a portfolio (unique per portfolio and field name)."""

    id: int
    portfolio_id: int
    template_id: int
    user_id: str
    field_name: str
    field_value: str
    field_type: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Customization":
        return cls(**dict(row))
