from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Create Base class for models
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create a SQLAlchemy engine for the sql store backend.

    SQLite gets check_same_thread disabled for FastAPI's threadpool; other
    databases get a bounded connection pool.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,
        max_overflow=20
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to `engine`"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """
    Initialize database.

    Registers the job listing model and creates its table if missing.
    """
    from app.models import listing  # noqa: F401  Import models to register them
    Base.metadata.create_all(bind=engine)
