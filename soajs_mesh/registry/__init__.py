"""Registry layer package for service-discovery bootstrap."""

from .errors import (
    REGISTRY_CONFIGURATION_MESSAGE,
    RegistryConfigurationError,
    RegistryDecodeError,
    RegistryError,
    RegistryTimeoutError,
    RegistryTransportError,
)
from .fetcher import RegistryHttpFetcher
from .interfaces import RegistryFetcherPort
from .models import Host, Registry
from .paths import NO_VERSION_SENTINEL, RegistryPath, registry_build_host_path

__all__ = [
    "Host",
    "NO_VERSION_SENTINEL",
    "REGISTRY_CONFIGURATION_MESSAGE",
    "Registry",
    "RegistryConfigurationError",
    "RegistryDecodeError",
    "RegistryError",
    "RegistryFetcherPort",
    "RegistryHttpFetcher",
    "RegistryPath",
    "RegistryTimeoutError",
    "RegistryTransportError",
    "registry_build_host_path",
]
