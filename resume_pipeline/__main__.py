import logging

import uvicorn

from resume_pipeline.core.config import settings

logger = logging.getLogger(__name__)


def main():
    """Serve the API with uvicorn."""
    logger.info("resume_service_starting host=%s port=%s", settings.host, settings.port)
    uvicorn.run(
        "resume_pipeline.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
