"""Registry service HTTP client used once at startup."""

from __future__ import annotations

import json
import logging
from typing import Final

import httpx
from pydantic import ValidationError

from .errors import (
    REGISTRY_CONFIGURATION_MESSAGE,
    RegistryConfigurationError,
    RegistryDecodeError,
    RegistryTimeoutError,
    RegistryTransportError,
)
from .interfaces import RegistryFetcherPort
from .models import Registry
from .paths import RegistryPath

logger = logging.getLogger(__name__)


class RegistryHttpFetcher(RegistryFetcherPort):
    """Fetch the registry document with a single `GET /register` call."""

    _USER_AGENT: Final[str] = "soajs-mesh/1.0 (Python/httpx)"

    def __init__(
        self,
        request_timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize registry fetcher.

        Args:
            request_timeout_seconds: HTTP request timeout in seconds.
            transport: Optional httpx transport, used to stub the registry service.

        Raises:
            ValueError: Raised when the timeout is not positive.
        """

        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._request_timeout_seconds = request_timeout_seconds
        self._transport = transport

    async def fetcher_fetch_registry(
        self,
        registry_api_address: str,
        service_name: str,
        env_code: str,
        query_parameters: dict[str, str] | None = None,
    ) -> Registry:
        """Resolve the registry document for one service and environment.

        Args:
            registry_api_address: Registry API base address.
            service_name: Name the current service registers under.
            env_code: Mesh environment code.
            query_parameters: Optional extra identifying parameters.

        Returns:
            Registry: Immutable resolved registry document.

        Raises:
            RegistryConfigurationError: Raised before any network call when registry
                address, service name or env code is blank.
            RegistryTransportError: Raised for network failures and non-success status.
            RegistryDecodeError: Raised when the body is not a valid registry document.
        """

        normalized_service_name = service_name.strip()
        normalized_env_code = env_code.strip()
        normalized_address = registry_api_address.strip()
        if not normalized_address or not normalized_service_name or not normalized_env_code:
            raise RegistryConfigurationError(REGISTRY_CONFIGURATION_MESSAGE)

        request_url = RegistryPath(address=normalized_address).registry_register_url()
        request_parameters = {"serviceName": normalized_service_name, "envCode": normalized_env_code}
        request_parameters.update(
            {name: value for name, value in (query_parameters or {}).items() if value}
        )

        payload = await self._fetcher_http_get(url=request_url, query_parameters=request_parameters)
        return self._fetcher_decode_registry(payload)

    async def _fetcher_http_get(self, url: str, query_parameters: dict[str, str]) -> bytes:
        """Execute one HTTP GET and return response payload bytes.

        Args:
            url: Endpoint URL.
            query_parameters: Query string parameters.

        Returns:
            bytes: HTTP response payload.

        Raises:
            RegistryTimeoutError: Raised when the request times out.
            RegistryTransportError: Raised for network and non-success HTTP status.
        """

        logger.debug("Fetching registry from %s", url)
        try:
            async with httpx.AsyncClient(
                timeout=self._request_timeout_seconds,
                transport=self._transport,
                headers={"User-Agent": self._USER_AGENT},
            ) as client:
                response = await client.get(url, params=query_parameters)
        except httpx.TimeoutException as error:
            logger.warning("Registry request to %s timed out", url)
            raise RegistryTimeoutError(f"could not fetch registry: request to {url} timed out") from error
        except httpx.HTTPError as error:
            logger.warning("Registry request to %s failed: %s", url, error)
            raise RegistryTransportError(f"could not fetch registry: {error}") from error
        except httpx.InvalidURL as error:
            logger.warning("Registry address in %s is malformed: %s", url, error)
            raise RegistryTransportError(f"could not fetch registry: {error}") from error

        if not response.is_success:
            logger.warning("Registry service returned HTTP %s", response.status_code)
            raise RegistryTransportError(
                f"could not fetch registry: registry service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        return response.content

    def _fetcher_decode_registry(self, payload: bytes) -> Registry:
        """Decode response bytes into a registry document.

        Args:
            payload: Raw response body.

        Returns:
            Registry: Validated registry document.

        Raises:
            RegistryDecodeError: Raised when payload is not valid registry JSON.
        """

        try:
            document = json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            raise RegistryDecodeError("could not decode registry: response body is not valid JSON") from error

        if not isinstance(document, dict):
            raise RegistryDecodeError("could not decode registry: response body is not a JSON object")

        try:
            return Registry.model_validate(document)
        except ValidationError as error:
            raise RegistryDecodeError(f"could not decode registry: {error}") from error
