"""Mesh header decoding for per-request client context."""

from __future__ import annotations

from typing import Any, Final, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

HEADER_DATA_NAME: Final[str] = "soajsinjectobj"
HEADER_PARSE_MESSAGE: Final[str] = "unable to parse SOAJS header"


class HeaderDecodeError(ValueError):
    """Mesh header is present but does not hold a valid JSON object."""


class HeaderInfo(BaseModel):
    """Client context injected by the mesh gateway.

    Attributes:
        device: Client device label.
        tenant: Tenant record resolved by the gateway.
        key: Tenant key configuration.
        application: Tenant application record.
        package: Product package record.
        urac: Authenticated user record.
        geo: Client geolocation data.
        awareness: Gateway awareness data about peer hosts.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    device: str = ""
    tenant: dict[str, Any] | None = None
    key: dict[str, Any] | None = None
    application: dict[str, Any] | None = None
    package: dict[str, Any] | None = None
    urac: dict[str, Any] | None = None
    geo: dict[str, Any] | None = None
    awareness: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        """Treat JSON `null` as an empty header and match keys case-insensitively.

        When several keys fold onto the same field, the last one wins.
        """

        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        field_names = {name.lower(): name for name in cls.model_fields}
        normalized: dict[str, Any] = {}
        for key, value in data.items():
            normalized[field_names.get(key.lower(), key)] = value
        return normalized


def header_decode_info(headers: Mapping[str, str]) -> HeaderInfo | None:
    """Decode the mesh header from request headers.

    Args:
        headers: Case-insensitive request header mapping, such as Starlette `Headers`.

    Returns:
        HeaderInfo | None: Decoded header, or None when the header is absent or empty.

    Raises:
        HeaderDecodeError: Raised when the header value is not a valid JSON object.
    """

    raw_value = headers.get(HEADER_DATA_NAME)
    if not raw_value:
        return None

    try:
        return HeaderInfo.model_validate_json(raw_value)
    except ValidationError as error:
        raise HeaderDecodeError(HEADER_PARSE_MESSAGE) from error
