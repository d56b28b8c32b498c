"""Custom exceptions for the SearXNG MCP launcher.

Every settings problem is a user-correctable configuration mistake, so none of
the exceptions below is retryable. The first failing check aborts the build and
the exception reaches the caller unchanged.
"""

from typing import Any


class SearxngMcpError(Exception):
    """Base exception class for the SearXNG MCP launcher."""

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    @property
    def is_retryable(self) -> bool:
        return False


# Settings Exceptions
class SettingsError(SearxngMcpError):
    """Raised when user-supplied context server settings are unusable."""


class SchemaError(SettingsError):
    """Raised when the settings payload does not match the settings record shape."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=(
                f"Invalid settings format: {reason}. "
                "Please check your searxng_url and optional fields in the context server settings."
            ),
            error_code="SCHEMA_ERROR",
            details=details or {"reason": reason},
        )


class SettingsValidationError(SettingsError):
    """Raised when a single settings field fails the security or format policy.

    Attributes:
        field: Name of the settings field that was checked.
        value: The offending raw value.
    """

    error_code_default = "SETTINGS_VALIDATION_ERROR"

    def __init__(self, message: str, field: str, value: str, details: dict[str, Any] | None = None):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            error_code=self.error_code_default,
            details=details or {"field": field},
        )


class MalformedUrlError(SettingsValidationError):
    """Raised when a URL is empty or does not parse as an absolute URL."""

    error_code_default = "MALFORMED_URL"


class UnsupportedSchemeError(SettingsValidationError):
    """Raised when a URL scheme is anything other than http or https."""

    error_code_default = "UNSUPPORTED_SCHEME"


class EmbeddedCredentialsError(SettingsValidationError):
    """Raised when a URL carries a user-info component."""

    error_code_default = "EMBEDDED_CREDENTIALS"


class ForbiddenHostError(SettingsValidationError):
    """Raised when a URL targets a loopback or private host literal."""

    error_code_default = "FORBIDDEN_HOST"


class PathTraversalError(SettingsValidationError):
    """Raised when a URL path contains a '..' sequence."""

    error_code_default = "PATH_TRAVERSAL"


class TooLongError(SettingsValidationError):
    """Raised when a value exceeds its maximum length."""

    error_code_default = "TOO_LONG"

    def __init__(self, message: str, field: str, value: str, max_length: int):
        self.max_length = max_length
        super().__init__(
            message=message,
            field=field,
            value=value,
            details={"field": field, "length": len(value), "max_length": max_length},
        )


class InvalidCharactersError(SettingsValidationError):
    """Raised when a value contains characters outside its whitelist."""

    error_code_default = "INVALID_CHARACTERS"


class SuspiciousPatternError(SettingsValidationError):
    """Raised when a NO_PROXY entry contains a '..' sequence."""

    error_code_default = "SUSPICIOUS_PATTERN"


# Host Exceptions
class PackageInstallError(SearxngMcpError):
    """Raised when the host fails to report or install the pinned npm package."""

    def __init__(self, package: str, version: str, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Failed to install npm package '{package}@{version}': {reason}",
            error_code="PACKAGE_INSTALL_FAILED",
            details=details or {"package": package, "version": version, "reason": reason},
        )
