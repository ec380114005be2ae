"""Serve command - run the API with uvicorn."""

import cyclopts
import logfire
import uvicorn

app = cyclopts.App(name="serve", help="Run the Storefront API server")


@app.default
def serve(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Start the HTTP server.

    Parameters
    ----------
    host
        Interface to bind.
    port
        Port to listen on.
    reload
        Restart on code changes (development only).
    """
    # Logfire must be configured before the app is created
    logfire.configure(send_to_logfire="if-token-present")
    uvicorn.run(
        "storefront.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )
