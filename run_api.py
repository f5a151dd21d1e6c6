"""FastAPI development server launcher.

Usage:
    python run_api.py

The server will start on http://localhost:8000
API docs available at http://localhost:8000/api/docs
"""

import logging

import uvicorn

from src.config import config

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("Starting FastAPI server (docs: http://localhost:8000/api/docs)")

    uvicorn.run(
        "src.interfaces.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=config.ENVIRONMENT != "production",
        log_level=config.LOG_LEVEL.lower(),
    )
