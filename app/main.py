"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service.
"""

import argparse
import logging

from app.bootstrap import bootstrap_create_application
from app.config import SettingsLoadError, config_configure_logging, config_load_settings
from app.server import server_create

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Run the HTTP service with validated startup configuration.

    Args:
        argv: Optional argument list; defaults to process arguments.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with status 1 when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="Multi-Cloud Web App runtime entrypoint")
    argument_parser.add_argument("--host", dest="host", type=str, help="Override bind host (HOST)")
    argument_parser.add_argument("--port", dest="port", type=int, help="Override bind port (PORT)")
    parsed_arguments = argument_parser.parse_args(argv)

    overrides = {
        key: value
        for key, value in (("host", parsed_arguments.host), ("port", parsed_arguments.port))
        if value is not None
    }
    try:
        settings = config_load_settings(**overrides)
    except SettingsLoadError as error:
        config_configure_logging("ERROR")
        logger.error("%s", error)
        raise SystemExit(1) from error

    application = bootstrap_create_application(settings=settings)
    server = server_create(application, settings)
    server.run()


if __name__ == "__main__":
    main()
