"""Pure path and URL builders for registry and peer service addressing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

NO_VERSION_SENTINEL: Final[str] = "-"


def registry_build_host_path(host: str, port: int, *segments: str) -> str:
    """Build `<host>:<port>/<service>/v<version>/.../` from path segments.

    The first segment is the service name and the second the version token.
    A leading `v` on the version token is stripped; an empty token or the `-`
    sentinel emits no version segment. Fewer than two segments yield the bare
    host root. Trailing segments are emitted literally except `-`.

    Args:
        host: Hostname.
        port: Port number.
        segments: Service name, version token and optional trailing segments.

    Returns:
        str: Path that always ends with `/`.
    """

    path = f"{host}:{port}/"
    if len(segments) < 2:
        return path

    service_name, version_token, *trailing_segments = segments
    path_segments = [service_name]

    version = version_token[1:] if version_token.startswith("v") else version_token
    if version and version != NO_VERSION_SENTINEL:
        path_segments.append(f"v{version}")

    path_segments.extend(segment for segment in trailing_segments if segment != NO_VERSION_SENTINEL)
    return path + "".join(f"{segment}/" for segment in path_segments)


@dataclass(frozen=True)
class RegistryPath:
    """Registry service addressing built from a base address.

    Attributes:
        address: Registry API base address, for example `localhost:5000`.
    """

    address: str

    def registry_register_url(self) -> str:
        """Return the absolute registry register endpoint URL."""

        return f"http://{self.address}/register"
