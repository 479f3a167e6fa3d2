"""
Purpose:
- `python -m app` launcher: uvicorn on settings.host/settings.port.
- Uvicorn owns the listen/serve loop and drains in-flight requests on SIGINT/SIGTERM.
"""

import uvicorn

from .core.logging import get_logger
from .core.settings import settings

logger = get_logger(__name__)

def main() -> None:
    logger.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
    logger.info("server_stopped")

if __name__ == "__main__":
    main()
