#!/usr/bin/env python3
"""
mapsgate server launcher
Serves the JSON-RPC tool endpoint plus health/stats over FastAPI (uvicorn)
"""
import os
import sys

# Fix encoding issues on servers with ASCII locale
os.environ.setdefault('PYTHONIOENCODING', 'utf-8')

import logging
import uvicorn
from mapsgate.config import settings, require_api_key

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Validate configuration, then serve until SIGINT/SIGTERM."""
    require_api_key()
    logger.info("Starting mapsgate server...")
    logger.info(f"Python {sys.version}, encoding={sys.getdefaultencoding()}")
    logger.info(f"Tool endpoint: http://{settings.host}:{settings.port}/sse")
    logger.info(f"Health check: / and /health, usage stats: /stats")
    logger.info(f"Rate limiting: {settings.rate_limit} requests per "
                f"{settings.rate_limit_window_s}s per caller")

    config = uvicorn.Config(
        "mapsgate.server:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level="info",
        proxy_headers=True,
    )
    uvicorn.Server(config).run()


if __name__ == "__main__":
    main()
