"""Entry point for the Business Dashboard API.

Serves the FastAPI application with Uvicorn.  Configuration such as
the record store URL and credentials is read from environment
variables (see ``business_dashboard_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from business_dashboard_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn.

    Host and port are read from environment variables ``HOST`` and
    ``PORT``.  Defaults are ``0.0.0.0`` and ``8000``.
    """
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


async def main() -> None:
    await run_api()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
