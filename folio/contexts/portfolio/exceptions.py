"""Custom exceptions for the portfolio context with record references."""

from typing import List, Optional

from folio.contexts.rendering.exceptions import InvalidCustomizationError


class RecordNotFoundError(LookupError):
    """
    Raised when a stored record cannot be found.

    Attributes:
        record_type: Kind of record (e.g., "template", "portfolio")
        identifier: Id or slug used for the lookup
    """

    record_type = "record"

    def __init__(self, identifier: object, message: Optional[str] = None):
        self.identifier = identifier
        super().__init__(message or f"{self.record_type.capitalize()} not found: {identifier}")


class TemplateNotFoundError(RecordNotFoundError):
    record_type = "template"


class PortfolioNotFoundError(RecordNotFoundError):
    record_type = "portfolio"


class CustomizationNotFoundError(RecordNotFoundError):
    record_type = "customization"


class DuplicateSlugError(ValueError):
    """
    Raised when a slug is already taken within its scope.

    Attributes:
        slug: Conflicting slug
        scope: Where the slug must be unique (e.g., "templates", "user 42")
    """

    def __init__(self, slug: str, scope: str):
        self.slug = slug
        self.scope = scope
        super().__init__(f"Slug '{slug}' already exists in {scope}")


class TemplateValidationError(ValueError):
    """
    Raised when template component code fails validation on save.

    Attributes:
        message: Error description
        template_name: Name of the template being saved
        errors: Validator messages in rule order
    """

    def __init__(self, message: str, template_name: Optional[str] = None, errors: List[str] = None):
        self.message = message
        self.template_name = template_name
        self.errors = list(errors or [])

        parts = [message]
        if template_name:
            parts.append(f"Template: {template_name}")
        for error in self.errors:
            parts.append(f"  - {error}")

        super().__init__("\n".join(parts))


class TemplateInUseError(ValueError):
    """Raised when deleting a template that portfolios still reference."""

    def __init__(self, template_id: int, portfolio_count: int):
        self.template_id = template_id
        self.portfolio_count = portfolio_count
        super().__init__(
            f"Template {template_id} is used by {portfolio_count} portfolio(s) and cannot be deleted"
        )


__all__ = [
    "RecordNotFoundError",
    "TemplateNotFoundError",
    "PortfolioNotFoundError",
    "CustomizationNotFoundError",
    "DuplicateSlugError",
    "TemplateValidationError",
    "TemplateInUseError",
    "InvalidCustomizationError",
]
