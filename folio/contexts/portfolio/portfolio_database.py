"""
Persistent SQLite store for templates, portfolios, and customizations.

Supplies the render engine with RenderContext values: a portfolio's template
code plus its flat field-name -> value customization mapping.
"""

import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from folio.contexts.portfolio.data_structures import (
    Customization,
    Portfolio,
    PortfolioTemplate,
)
from folio.contexts.portfolio.exceptions import (
    CustomizationNotFoundError,
    DuplicateSlugError,
    InvalidCustomizationError,
    PortfolioNotFoundError,
    TemplateInUseError,
    TemplateNotFoundError,
    TemplateValidationError,
)
from folio.contexts.portfolio.logger import _log_debug, _log_info
from folio.contexts.rendering import RenderContext, validate_component_code
from folio.utils.text_processing import slugify
from folio.utils.timestamp import now_exact

SCHEMA = """
CREATE TABLE IF NOT EXISTS templates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    slug TEXT NOT NULL UNIQUE,
    description TEXT NOT NULL DEFAULT '',
    category TEXT NOT NULL DEFAULT 'general',
    thumbnail TEXT,
    code TEXT NOT NULL,
    published INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS portfolios (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    template_id INTEGER NOT NULL REFERENCES templates(id),
    title TEXT NOT NULL,
    slug TEXT NOT NULL,
    published INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE (user_id, slug)
);

CREATE TABLE IF NOT EXISTS customizations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    portfolio_id INTEGER NOT NULL REFERENCES portfolios(id) ON DELETE CASCADE,
    template_id INTEGER NOT NULL,
    user_id TEXT NOT NULL,
    field_name TEXT NOT NULL,
    field_value TEXT NOT NULL,
    field_type TEXT NOT NULL,
    UNIQUE (portfolio_id, field_name)
);

CREATE INDEX IF NOT EXISTS idx_portfolios_user ON portfolios(user_id);
CREATE INDEX IF NOT EXISTS idx_customizations_portfolio ON customizations(portfolio_id);
"""

# Columns callers may change after creation
TEMPLATE_UPDATABLE = ("name", "slug", "description", "category", "thumbnail", "code", "published")
PORTFOLIO_UPDATABLE = ("title", "slug", "published")


class PortfolioDatabase:
    """
    SQLite database of portfolio templates, portfolios, and customizations.

    The database is persistent: create it once with initialize(), then open it
    later by instantiating with the db_path. One connection per instance.

    Example:
        >>> with PortfolioDatabase.initialize(Path("outs/portfolio.db")) as db:
        ...     template = db.create_template("Minimal", code=source)
        ...     portfolio = db.create_portfolio("user-1", template.id, "Jane Doe")
        ...     db.set_customization(portfolio.id, "heading", "Hello")
        ...     context = db.render_context(portfolio.id)
    """

    def __init__(self, db_path: Path):
        """
        Open an existing database.

        To create a new database, use PortfolioDatabase.initialize() instead.

        Args:
            db_path: Path to existing SQLite database file

        Raises:
            FileNotFoundError: If database file doesn't exist
        """
        self.db_path = db_path

        if not db_path.exists():
            raise FileNotFoundError(
                f"Database not found: {db_path}\n"
                f"To create a new database, use PortfolioDatabase.initialize()"
            )

        self.conn = sqlite3.connect(str(db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")

    @classmethod
    def initialize(cls, db_path: Path) -> "PortfolioDatabase":
        """
        Create the schema if needed and open the database.

        Idempotent: existing tables and rows are left untouched.
        """
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(db_path))
        conn.executescript(SCHEMA)
        conn.commit()
        conn.close()

        _log_debug(f"Initialized portfolio database at {db_path}")
        return cls(db_path)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "PortfolioDatabase":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def query(self, sql: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """
        Execute SQL query and return results as list of dicts.

        Args:
            sql: SQL query string
            params: Query parameters (for parameterized queries)
        """
        cursor = self.conn.execute(sql, params)
        return [dict(row) for row in cursor.fetchall()]

    def _fetch_one(self, sql: str, params: tuple) -> Optional[sqlite3.Row]:
        return self.conn.execute(sql, params).fetchone()

    def _update_columns(self, table: str, record_id: int, updates: Dict[str, Any]) -> None:
        assignments = ", ".join(f"{column} = ?" for column in updates)
        self.conn.execute(
            f"UPDATE {table} SET {assignments} WHERE id = ?",
            (*updates.values(), record_id),
        )

    # ============ TEMPLATES ============

    def _check_template_code(self, name: str, code: str) -> None:
        result = validate_component_code(code)
        if not result.is_valid:
            raise TemplateValidationError(
                "Template code failed validation", template_name=name, errors=result.errors
            )

    def create_template(
        self,
        name: str,
        code: str,
        slug: Optional[str] = None,
        description: str = "",
        category: str = "general",
        thumbnail: Optional[str] = None,
        published: bool = False,
    ) -> PortfolioTemplate:
        """
        Store a new template after validating its component code.

        Args:
            name: Display name
            code: Component source
            slug: Unique slug (derived from name when omitted)
            description: Catalog description
            category: Grouping label
            thumbnail: Asset-host URL of the preview image
            published: Visible in the public catalog

        Raises:
            TemplateValidationError: If code fails component validation
            DuplicateSlugError: If the slug is taken
            ValueError: If no slug can be derived from name
        """
        slug = slug or slugify(name)
        if not slug:
            raise ValueError(f"Cannot derive a slug from template name: {name!r}")

        self._check_template_code(name, code)

        if self._fetch_one("SELECT id FROM templates WHERE slug = ?", (slug,)):
            raise DuplicateSlugError(slug, "templates")

        timestamp = now_exact()
        cursor = self.conn.execute(
            """
            INSERT INTO templates
                (name, slug, description, category, thumbnail, code, published, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (name, slug, description, category, thumbnail, code, int(published), timestamp, timestamp),
        )
        self.conn.commit()

        _log_info(f"Created template '{slug}'")
        return self.get_template(cursor.lastrowid)

    def get_template(self, template_id: int) -> PortfolioTemplate:
        row = self._fetch_one("SELECT * FROM templates WHERE id = ?", (template_id,))
        if row is None:
            raise TemplateNotFoundError(template_id)
        return PortfolioTemplate.from_row(row)

    def get_template_by_slug(self, slug: str) -> PortfolioTemplate:
        row = self._fetch_one("SELECT * FROM templates WHERE slug = ?", (slug,))
        if row is None:
            raise TemplateNotFoundError(slug)
        return PortfolioTemplate.from_row(row)

    def list_templates(
        self, published_only: bool = False, category: Optional[str] = None
    ) -> List[PortfolioTemplate]:
        """List templates, newest first, optionally filtered."""
        clauses, params = [], []
        if published_only:
            clauses.append("published = 1")
        if category:
            clauses.append("category = ?")
            params.append(category)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self.conn.execute(
            f"SELECT * FROM templates {where} ORDER BY created_at DESC, id DESC", tuple(params)
        ).fetchall()
        return [PortfolioTemplate.from_row(row) for row in rows]

    def list_categories(self, published_only: bool = False) -> List[str]:
        """Distinct template categories, sorted (the catalog's category list)."""
        where = "WHERE published = 1" if published_only else ""
        rows = self.query(f"SELECT DISTINCT category FROM templates {where} ORDER BY category")
        return [row["category"] for row in rows]

    def update_template(self, template_id: int, **fields: Any) -> PortfolioTemplate:
        """
        Update template columns (see TEMPLATE_UPDATABLE).

        Changed code is re-validated; a changed slug must stay unique.

        Raises:
            TemplateNotFoundError: If template doesn't exist
            TemplateValidationError: If new code fails validation
            DuplicateSlugError: If new slug is taken
            ValueError: If an unknown column is given
        """
        unknown = set(fields) - set(TEMPLATE_UPDATABLE)
        if unknown:
            raise ValueError(f"Cannot update template fields: {sorted(unknown)}")

        template = self.get_template(template_id)

        if "code" in fields:
            self._check_template_code(fields.get("name", template.name), fields["code"])

        if "slug" in fields and fields["slug"] != template.slug:
            if self._fetch_one("SELECT id FROM templates WHERE slug = ?", (fields["slug"],)):
                raise DuplicateSlugError(fields["slug"], "templates")

        if "published" in fields:
            fields["published"] = int(fields["published"])

        if fields:
            self._update_columns("templates", template_id, {**fields, "updated_at": now_exact()})
            self.conn.commit()
            _log_info(f"Updated template '{template.slug}': {', '.join(sorted(fields))}")

        return self.get_template(template_id)

    def delete_template(self, template_id: int) -> None:
        """
        Delete a template that no portfolio uses.

        Raises:
            TemplateNotFoundError: If template doesn't exist
            TemplateInUseError: If portfolios still reference it
        """
        template = self.get_template(template_id)
        count = self._fetch_one(
            "SELECT COUNT(*) AS n FROM portfolios WHERE template_id = ?", (template_id,)
        )["n"]
        if count:
            raise TemplateInUseError(template_id, count)

        self.conn.execute("DELETE FROM templates WHERE id = ?", (template_id,))
        self.conn.commit()
        _log_info(f"Deleted template '{template.slug}'")

    # ============ PORTFOLIOS ============

    def _ensure_portfolio_slug_free(self, user_id: str, slug: str) -> None:
        if self._fetch_one(
            "SELECT id FROM portfolios WHERE user_id = ? AND slug = ?", (user_id, slug)
        ):
            raise DuplicateSlugError(slug, f"portfolios of user {user_id}")

    def create_portfolio(
        self, user_id: str, template_id: int, title: str, slug: Optional[str] = None
    ) -> Portfolio:
        """
        Create a portfolio for a user from a template.

        Args:
            user_id: Resolved identity of the owner
            template_id: Template the portfolio renders
            title: Display title
            slug: Per-user unique slug (derived from title when omitted)

        Raises:
            TemplateNotFoundError: If template doesn't exist
            DuplicateSlugError: If the user already has this slug
            ValueError: If no slug can be derived from title
        """
        self.get_template(template_id)

        slug = slug or slugify(title)
        if not slug:
            raise ValueError(f"Cannot derive a slug from portfolio title: {title!r}")
        self._ensure_portfolio_slug_free(user_id, slug)

        timestamp = now_exact()
        cursor = self.conn.execute(
            """
            INSERT INTO portfolios (user_id, template_id, title, slug, published, created_at, updated_at)
            VALUES (?, ?, ?, ?, 0, ?, ?)
            """,
            (user_id, template_id, title, slug, timestamp, timestamp),
        )
        self.conn.commit()

        _log_info(f"Created portfolio '{slug}' for user {user_id}")
        return self.get_portfolio(cursor.lastrowid)

    def get_portfolio(self, portfolio_id: int) -> Portfolio:
        row = self._fetch_one("SELECT * FROM portfolios WHERE id = ?", (portfolio_id,))
        if row is None:
            raise PortfolioNotFoundError(portfolio_id)
        return Portfolio.from_row(row)

    def get_portfolio_by_slug(self, user_id: str, slug: str) -> Portfolio:
        row = self._fetch_one(
            "SELECT * FROM portfolios WHERE user_id = ? AND slug = ?", (user_id, slug)
        )
        if row is None:
            raise PortfolioNotFoundError(f"{user_id}/{slug}")
        return Portfolio.from_row(row)

    def list_portfolios(self, user_id: str) -> List[Portfolio]:
        rows = self.conn.execute(
            "SELECT * FROM portfolios WHERE user_id = ? ORDER BY created_at DESC, id DESC",
            (user_id,),
        ).fetchall()
        return [Portfolio.from_row(row) for row in rows]

    def update_portfolio(self, portfolio_id: int, **fields: Any) -> Portfolio:
        """
        Update portfolio title, slug, or published flag.

        Raises:
            PortfolioNotFoundError: If portfolio doesn't exist
            DuplicateSlugError: If the new slug is taken for this user
            ValueError: If an unknown column is given
        """
        unknown = set(fields) - set(PORTFOLIO_UPDATABLE)
        if unknown:
            raise ValueError(f"Cannot update portfolio fields: {sorted(unknown)}")

        portfolio = self.get_portfolio(portfolio_id)

        if "slug" in fields and fields["slug"] != portfolio.slug:
            self._ensure_portfolio_slug_free(portfolio.user_id, fields["slug"])

        if "published" in fields:
            fields["published"] = int(fields["published"])

        if fields:
            self._update_columns("portfolios", portfolio_id, {**fields, "updated_at": now_exact()})
            self.conn.commit()

        return self.get_portfolio(portfolio_id)

    def delete_portfolio(self, portfolio_id: int) -> None:
        """Delete a portfolio and its customizations."""
        portfolio = self.get_portfolio(portfolio_id)
        self.conn.execute("DELETE FROM customizations WHERE portfolio_id = ?", (portfolio_id,))
        self.conn.execute("DELETE FROM portfolios WHERE id = ?", (portfolio_id,))
        self.conn.commit()
        _log_info(f"Deleted portfolio '{portfolio.slug}'")

    # ============ CUSTOMIZATIONS ============

    def set_customization(
        self,
        portfolio_id: int,
        field_name: str,
        field_value: str,
        field_type: str = "text",
    ) -> Customization:
        """
        Add or replace one field override for a portfolio.

        On an existing (portfolio, field_name) only the value changes; the
        original field_type is kept.

        Raises:
            PortfolioNotFoundError: If portfolio doesn't exist
            ValueError: If field_name or field_type is empty
            InvalidCustomizationError: If field_value is not a string
        """
        if not field_name or not field_type:
            raise ValueError("Customization requires a field name and a field type")
        if not isinstance(field_value, str):
            raise InvalidCustomizationError(
                "Customization values must be strings", field_name=field_name, value=field_value
            )

        portfolio = self.get_portfolio(portfolio_id)

        self.conn.execute(
            """
            INSERT INTO customizations
                (portfolio_id, template_id, user_id, field_name, field_value, field_type)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT (portfolio_id, field_name) DO UPDATE SET field_value = excluded.field_value
            """,
            (
                portfolio_id,
                portfolio.template_id,
                portfolio.user_id,
                field_name,
                field_value,
                field_type,
            ),
        )
        self.conn.commit()

        row = self._fetch_one(
            "SELECT * FROM customizations WHERE portfolio_id = ? AND field_name = ?",
            (portfolio_id, field_name),
        )
        return Customization.from_row(row)

    def get_customization(self, customization_id: int) -> Customization:
        row = self._fetch_one("SELECT * FROM customizations WHERE id = ?", (customization_id,))
        if row is None:
            raise CustomizationNotFoundError(customization_id)
        return Customization.from_row(row)

    def update_customization(self, customization_id: int, field_value: str) -> Customization:
        """Replace the value of an existing customization by id."""
        if not isinstance(field_value, str):
            raise InvalidCustomizationError(
                "Customization values must be strings", value=field_value
            )

        self.get_customization(customization_id)
        self.conn.execute(
            "UPDATE customizations SET field_value = ? WHERE id = ?",
            (field_value, customization_id),
        )
        self.conn.commit()
        return self.get_customization(customization_id)

    def list_customizations(self, portfolio_id: int) -> List[Customization]:
        rows = self.conn.execute(
            "SELECT * FROM customizations WHERE portfolio_id = ? ORDER BY id",
            (portfolio_id,),
        ).fetchall()
        return [Customization.from_row(row) for row in rows]

    def get_customizations(self, portfolio_id: int) -> Dict[str, str]:
        """Flat field-name -> value mapping for one portfolio."""
        return {c.field_name: c.field_value for c in self.list_customizations(portfolio_id)}

    def delete_customization(self, customization_id: int) -> None:
        self.get_customization(customization_id)
        self.conn.execute("DELETE FROM customizations WHERE id = ?", (customization_id,))
        self.conn.commit()

    # ============ RENDERING ============

    def render_context(self, portfolio_id: int) -> RenderContext:
        """Build the render engine input for a portfolio."""
        portfolio = self.get_portfolio(portfolio_id)
        template = self.get_template(portfolio.template_id)
        return RenderContext(
            component_code=template.code,
            customizations=self.get_customizations(portfolio_id),
        )
