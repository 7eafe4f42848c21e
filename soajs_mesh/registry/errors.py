"""Project-native typed exceptions for registry bootstrap failures."""

from __future__ import annotations

from typing import Final

REGISTRY_CONFIGURATION_MESSAGE: Final[str] = "could not create new registry: service name and env code are required"


class RegistryError(Exception):
    """Base exception for registry bootstrap failures."""


class RegistryConfigurationError(RegistryError, ValueError):
    """Required registry identifying parameters are missing."""


class RegistryTransportError(RegistryError, ConnectionError):
    """Registry service could not be reached or answered with a non-success status.

    Attributes:
        status_code: HTTP status returned by the registry service, when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RegistryTimeoutError(RegistryTransportError, TimeoutError):
    """Registry request did not complete within the configured timeout."""


class RegistryDecodeError(RegistryError, ValueError):
    """Registry service response body is not a valid registry document."""
