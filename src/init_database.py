"""Initialize the parking database."""
from src.config.settings_env import settings
from src.infrastructure.persistence.database import make_engine, init_db
from src.shared.utils import logger

if __name__ == "__main__":
    logger.info("Initializing parking database...")
    init_db(make_engine(settings.DATABASE_URL))
    logger.info("Database initialization complete!")
