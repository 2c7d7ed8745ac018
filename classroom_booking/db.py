import os
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from classroom_booking.config import settings


SQLALCHEMY_DATABASE_URL = settings.database_url

connect_args = {}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_database():
    """Create the data directory of a file-backed SQLite database and all tables."""
    url = make_url(SQLALCHEMY_DATABASE_URL)
    if url.drivername.startswith("sqlite") and url.database and url.database != ":memory:":
        directory = os.path.dirname(url.database)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

    # models must be imported so their tables are registered on Base
    from classroom_booking.models import booking, building, classroom, user  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db():
    """Provide a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
