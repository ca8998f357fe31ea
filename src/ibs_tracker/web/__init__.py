"""Web UI for the IBS tracker."""

import uvicorn


def run(host: str = "127.0.0.1", port: int = 8000, reload: bool = False):
    """Serve the web app with uvicorn."""
    uvicorn.run("ibs_tracker.web.app:app", host=host, port=port, reload=reload)


__all__ = ["run"]
