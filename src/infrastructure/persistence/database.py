from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from loguru import logger

from src.config.settings_env import settings
from src.infrastructure.persistence.models.models import Base


def make_engine(database_url: str = settings.DATABASE_URL):
    connect_args = {"check_same_thread": False} if "sqlite" in database_url else {}
    return create_engine(database_url, connect_args=connect_args)


def make_session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


def init_db(engine):
    logger.info(f"Initializing database at: {engine.url}")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Tables created")
