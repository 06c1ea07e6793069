"""Run the HTTP API."""

import click
import uvicorn

from cli.config import load_config_model


@click.command()
@click.option("--host", default=None, help="Bind address (default: config / HOST)")
@click.option("--port", type=int, default=None, help="Port (default: config / PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host, port, reload):
    """Start the prediction API server."""
    config = load_config_model()
    uvicorn.run(
        "web.app:create_app",
        factory=True,
        host=host or config.server.host,
        port=port or config.server.port,
        reload=reload,
        log_config=None,
    )
