"""Custom exception hierarchy for the sundrop sprite bundler.

This module defines domain-specific exceptions so callers (the command line,
a file watcher, or a build script) can tell a misconfigured source location
from an icon that vanished mid-build without parsing error strings.

Exception Hierarchy:
    SundropError (Base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   └── ConfigFileNotFoundError
    ├── SourceLocationUnresolvedError
    │   └── PackageNotFoundError
    ├── InvalidAliasError
    ├── RenderError
    │   ├── IconFileUnreadableError
    │   ├── OutputIdCollisionError
    │   └── SvgOptimizationError
    └── OutputWriteError

An empty match set is not an error; it is reported through
``sundrop.models.results.NoMatchesFound``.
"""

from typing import Any


# Base Exception
class SundropError(Exception):
    """Base exception for all sundrop errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(SundropError):
    """Base exception for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration contains invalid values.

    Example:
        raise InvalidConfigError(
            "Invalid configuration",
            {"path": "sundrop.yaml", "errors": ["scan_batch_size: must be positive"]}
        )
    """

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when a configuration file cannot be found.

    Example:
        raise ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": "/project/sundrop.yaml"}
        )
    """

    pass


# Index Exceptions
class SourceLocationUnresolvedError(SundropError):
    """Raised when a configured icon source location cannot be found.

    Indexing stops at the first unresolved location; no partial index is built.

    Example:
        raise SourceLocationUnresolvedError(
            "Icon source location not found: ./icons",
            {"location": "./icons", "resolved": "/project/icons"}
        )
    """

    def __init__(
        self, message: str, details: dict[str, Any] | None = None, location: str | None = None
    ) -> None:
        """Initialize with the offending source location.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
            location: The source location string as configured
        """
        super().__init__(message, details)
        self.location = location


class PackageNotFoundError(SourceLocationUnresolvedError):
    """Raised when a package identifier cannot be resolved to a directory.

    Example:
        raise PackageNotFoundError(
            "Could not resolve @scope/icons",
            {"package": "@scope/icons", "searched": ["/project/node_modules/@scope/icons"]},
            location="@scope/icons/svg",
        )
    """

    pass


class InvalidAliasError(SundropError):
    """Raised for aliases whose target icon is not indexed.

    Invalid aliases are normally collected as diagnostics and the build
    continues; this exception is only raised when strict alias checking
    is enabled in the build configuration.

    Example:
        raise InvalidAliasError(
            "Aliases point at unknown icons: back",
            {"aliases": ["back"]}
        )
    """

    pass


# Render Exceptions
class RenderError(SundropError):
    """Base exception for sprite rendering errors."""

    pass


class IconFileUnreadableError(RenderError):
    """Raised when a matched icon file cannot be read or parsed.

    Example:
        raise IconFileUnreadableError(
            "Icon file unreadable: /project/icons/arrow.svg",
            {"path": "/project/icons/arrow.svg", "error": "No such file or directory"}
        )
    """

    pass


class OutputIdCollisionError(RenderError):
    """Raised when two icons would be emitted with the same output id.

    Example:
        raise OutputIdCollisionError(
            "Duplicate sprite id: icon-arrow",
            {"id": "icon-arrow", "paths": ["/a/arrow.svg", "/b/arrow.svg"]}
        )
    """

    pass


class SvgOptimizationError(RenderError):
    """Raised when the optimizer cannot parse or process the sprite document.

    Example:
        raise SvgOptimizationError(
            "Failed to parse sprite markup",
            {"error": "Opening and ending tag mismatch: svg line 1 and path"}
        )
    """

    pass


# Output Exceptions
class OutputWriteError(SundropError):
    """Raised when the rendered sprite sheet cannot be written.

    Example:
        raise OutputWriteError(
            "Failed to write sprite sheet",
            {"path": "/project/dist/sprites.svg", "error": "Permission denied"}
        )
    """

    pass


# Utility function for exception chaining
def chain_exception(new_exception: SundropError, cause: Exception) -> SundropError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            markup = path.read_text()
        except OSError as e:
            raise chain_exception(
                IconFileUnreadableError("Icon file unreadable", {"path": str(path)}),
                e
            )
    """
    new_exception.__cause__ = cause
    return new_exception
