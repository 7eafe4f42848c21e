"""Typed interfaces for registry-layer responsibilities."""

from typing import Protocol

from .models import Registry


class RegistryFetcherPort(Protocol):
    """Port definition for resolving the registry document at startup."""

    async def fetcher_fetch_registry(
        self,
        registry_api_address: str,
        service_name: str,
        env_code: str,
        query_parameters: dict[str, str] | None = None,
    ) -> Registry:
        """Fetch one registry document from the registry service.

        Args:
            registry_api_address: Registry API base address.
            service_name: Name the current service registers under.
            env_code: Mesh environment code.
            query_parameters: Optional extra identifying parameters.

        Returns:
            Registry: Immutable resolved registry document.

        Raises:
            RegistryConfigurationError: Raised when identifying parameters are missing.
            RegistryTransportError: Raised when the registry service is unreachable.
            RegistryDecodeError: Raised when the response is not a registry document.
        """
