"""
Main entry point for the phrase highlight API application.
This module initializes the FastAPI application by creating an app instance from the API factory,
loads configuration parameters using the configuration singleton,
and starts the Uvicorn server with the specified host, port, and debug settings.
"""

import uvicorn
from highlight_backend.app.api.main import create_app
from highlight_backend.app.utils.logging.logger import log_info
from highlight_backend.app.configs.config_singleton import get_config

# Create the FastAPI application instance using the factory function.
app = create_app()

# Load the API port, host and debug flag from the configuration.
port = get_config("api_port", 8000)
host = get_config("api_host", "0.0.0.0")
debug = get_config("debug", False)


def run() -> None:
    """Start the Uvicorn server for the phrase highlight API."""
    log_info(f"[OK] Starting server on {host}:{port} (debug={debug})")
    uvicorn.run(
        "highlight_backend.main:app",  # Path to the ASGI application.
        host=host,
        port=port,
        reload=debug,  # Enable automatic reload if in debug mode.
        log_level="info",
        workers=1,
        limit_concurrency=100,  # Limit the number of concurrent requests.
    )


if __name__ == "__main__":
    run()
