"""Base classes and constants for domain models."""


class ValidationError(Exception):
    """Raised when a domain object is constructed with invalid data."""

    pass


# Constants
REQUIRED_FIELDS = ("title", "type", "body")
MAX_TITLE_LENGTH = 255
MAX_TYPE_LENGTH = 32
