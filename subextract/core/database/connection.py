# File: subextract/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from subextract.core.config.settings import settings
from subextract.core.database.base import Base

# check_same_thread=False lets extraction worker threads share the SQLite engine
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db():
    """Creates the metadata store tables if they are missing."""
    # Import models so they register on Base
    import subextract.features.metadata_link.data.sql_models  # noqa: F401
    Base.metadata.create_all(bind=engine)
