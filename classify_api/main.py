import logging
import os

import uvicorn
from dotenv import load_dotenv

from classify_api.core.config import configure_logging

# Load environment variables before logging reads LOG_LEVEL
load_dotenv()
configure_logging()
logger = logging.getLogger("ClassifyServer")


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))

    logger.info(f"Application is starting on: http://{host}:{port}")
    uvicorn.run("classify_api.api.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
