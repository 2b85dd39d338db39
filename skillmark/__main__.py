import logging

import uvicorn

from skillmark.core.config import settings
from skillmark.main import create_app

logger = logging.getLogger(__name__)


def main():
    app = create_app(settings)
    logger.info(f"{settings.PROJECT_NAME} running at http://{settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
