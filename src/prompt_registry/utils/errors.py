"""
Custom exception hierarchy for the Prompt Registry application.

Provides domain-specific exceptions for template loading, lookup and resolution.
"""

from pathlib import Path


class PromptRegistryError(Exception):
    """
    Base exception for all Prompt Registry-specific errors.

    All application errors should inherit from this class.
    """

    status_code = 400

    def __init__(self, message: str, error_code: str | None = None) -> None:
        """
        Initialize a Prompt Registry error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for categorization
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class ConfigurationError(PromptRegistryError):
    """
    Raised when there's an error in application configuration.

    Typically thrown during startup when settings are invalid.
    """


class LoadError(PromptRegistryError):
    """
    Raised when a template source cannot be loaded.

    Covers unreadable or malformed files, missing front-matter fields and
    duplicate identifiers. Fatal at startup.
    """

    def __init__(self, message: str, source: Path | str | None = None) -> None:
        """
        Initialize a load error.

        Args:
            message: Human-readable error message
            source: Optional path of the offending template file
        """
        if source is not None:
            message = f"{source}: {message}"
        super().__init__(message, error_code="TEMPLATE_LOAD_FAILED")
        self.source = str(source) if source is not None else None


class NotFoundError(PromptRegistryError):
    """Raised when a requested template identifier was never loaded."""

    status_code = 404

    def __init__(self, identifier: str, message: str | None = None) -> None:
        super().__init__(
            message or f"Template not found: {identifier!r}",
            error_code="TEMPLATE_NOT_FOUND",
        )
        self.identifier = identifier


class MissingVariableError(PromptRegistryError):
    """
    Raised when a required placeholder has no supplied value and no default.

    Carries the placeholder name so callers can ask for the missing value.
    """

    status_code = 422

    def __init__(self, placeholder: str, identifier: str | None = None) -> None:
        """
        Initialize a missing variable error.

        Args:
            placeholder: Name of the first unfilled placeholder
            identifier: Optional identifier of the template being resolved
        """
        if identifier:
            message = f"Missing value for placeholder {placeholder!r} in template {identifier!r}"
        else:
            message = f"Missing value for placeholder {placeholder!r}"
        super().__init__(message, error_code="MISSING_VARIABLE")
        self.placeholder = placeholder
        self.identifier = identifier
