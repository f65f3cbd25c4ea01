"""Custom exceptions for the fleet API."""


class FleetError(Exception):
    """Base exception for the fleet API."""

    pass


class ValidationError(FleetError):
    """Raised when request input is malformed or inconsistent."""

    pass


class NotFoundError(FleetError):
    """Raised when a resource is not found."""

    pass


class ConfigurationError(FleetError):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(FleetError):
    """Raised when credentials or bearer tokens are rejected."""

    pass


class AuthorizationError(FleetError):
    """Raised when an authenticated role lacks a required scope."""

    pass
