"""
Database session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from tripbudget.core.config import settings
from tripbudget.db.base import Base

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI serves sync routes from a threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_recycle=3600,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    # Registers every model on Base.metadata
    import tripbudget.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
