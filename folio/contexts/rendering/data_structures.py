"""Data structures passed through the render pipeline."""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional


@dataclass(frozen=True)
class RenderContext:
    """
    Input to one render or preview request.

    Attributes:
        component_code: Raw component source authored for a template
        customizations: Field-name to value overrides for this rendering
    """

    component_code: str
    customizations: Mapping[str, str] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """
    Result of validating component source or customizations.

    Attributes:
        is_valid: True iff no rule matched
        errors: Messages of matched rules, in rule declaration order
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=list(errors))

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Combine two results, keeping this result's errors first."""
        return ValidationResult.from_errors(self.errors + other.errors)


@dataclass
class RenderResult:
    """
    Outcome of a full render pipeline run.

    Attributes:
        validation: Validation outcome (always present)
        html: Generated document (None when validation failed)
        preview_url: Published blob URL (None when failed or not published)
    """

    validation: ValidationResult
    html: Optional[str] = None
    preview_url: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.validation.is_valid

    @property
    def errors(self) -> List[str]:
        return self.validation.errors
