"""Custom exceptions for the rendering context."""

from typing import Optional


class InvalidCustomizationError(ValueError):
    """
    Raised when a customization cannot be embedded as string data.

    Attributes:
        field_name: Offending field (repr of the key if the key itself is invalid)
        value: Offending value
    """

    def __init__(self, message: str, field_name: Optional[str] = None, value: object = None):
        self.message = message
        self.field_name = field_name
        self.value = value

        parts = [message]
        if field_name is not None:
            parts.append(f"Field: {field_name}")
            parts.append(f"Value type: {type(value).__name__}")

        super().__init__("\n".join(parts))


class PreviewNotFoundError(LookupError):
    """Raised when a preview handle is unknown or has already been released."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No published preview for handle: {url}")
