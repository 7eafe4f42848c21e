"""Immutable registry document models.

A `Registry` is resolved once at startup and then shared read-only by every
request, so every model here is frozen and collections are tuples.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .paths import registry_build_host_path


class Host(BaseModel):
    """Network location of a service instance.

    Attributes:
        host: Hostname or IP address.
        port: TCP port.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    host: str = ""
    port: int = 0

    def host_path(self, *segments: str) -> str:
        """Build a slash-delimited path rooted at this host.

        Args:
            segments: Service name, version token and optional trailing segments.

        Returns:
            str: Path such as `localhost:8080/CONTROLLER/v1/`.
        """

        return registry_build_host_path(self.host, self.port, *segments)


class Registry(BaseModel):
    """Resolved service-mesh document for the current service.

    The zero value `Registry()` stands for "no registry in use".

    Attributes:
        name: Registered service name.
        environment: Environment code the registry was resolved for.
        hosts: Known hosts for the service and its peers.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    environment: str = ""
    hosts: tuple[Host, ...] = Field(default_factory=tuple)
