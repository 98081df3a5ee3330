# app/main.py
import uvicorn

from app.api import create_app
from app.utils import settings
from app.utils.logging import get_logger, setup_logging

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)

app = create_app()

if __name__ == "__main__":
    logger.info(f"Starting Users API on {settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
