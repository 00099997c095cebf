"""Serve the API with uvicorn: ``python -m reconnect`` or the ``reconnect`` script."""
from __future__ import annotations

import uvicorn

from reconnect.core.config import get_settings


def main() -> None:
    settings = get_settings()
    # Logging is configured by create_app(); keep uvicorn from replacing it.
    uvicorn.run(
        "reconnect.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    main()
