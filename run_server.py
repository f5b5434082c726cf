import os

import uvicorn

from ecospace.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, service_name=settings.service_name)
    if settings.random_seed is not None:
        logger.info(f"Serving reproducible data (ECOSPACE_RANDOM_SEED={settings.random_seed})")

    uvicorn.run(
        "ecospace.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
