"""Main module entrypoint for local runtime execution.

This module validates startup configuration, resolves the registry and
launches the FastAPI service.
"""

import asyncio
import logging

import uvicorn

from soajs_mesh.bootstrap import bootstrap_create_application
from soajs_mesh.config import config_load_settings


def main() -> None:
    """Resolve the registry and serve the application.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        RegistryError: Raised when the registry cannot be resolved.
    """

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    settings = config_load_settings()
    application = asyncio.run(bootstrap_create_application(settings))
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


if __name__ == "__main__":
    main()
