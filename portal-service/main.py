import logging

import uvicorn

from api.app import create_app
from config import Config
from db.database import Database
from services.tracking_numbers import TrackingNumberGenerator

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)


def initialize_database(database: Database):
    """
    Creates all tables defined by models that inherit from Base.
    """
    logger.info("Creating database tables...")
    # Only creates tables that don't already exist.
    database.create_tables()
    logger.info("Tables created successfully.")


def main():
    database = Database(Config.DATABASE_URL, echo=Config.SQL_ECHO)
    initialize_database(database)
    app = create_app(
        database,
        tracking_numbers=TrackingNumberGenerator(prefix=Config.TRACKING_NUMBER_PREFIX),
        cors_origins=Config.CORS_ORIGINS,
    )
    logger.info("Starting portal service on %s:%s", Config.API_HOST, Config.API_PORT)
    uvicorn.run(app, host=Config.API_HOST, port=Config.API_PORT)


if __name__ == "__main__":
    main()
