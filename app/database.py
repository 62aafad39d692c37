"""Database connection and session management."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from app.config import settings

Base = declarative_base()


def build_engine(database_url: str, environment: str) -> Engine:
    """
    Create an engine suited to the given database URL.

    Args:
        database_url: SQLAlchemy database URL
        environment: Deployment environment name

    Returns:
        Configured SQLAlchemy engine
    """
    echo = environment == "development"

    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    # Use NullPool behind an external connection pooler (port 6543)
    if "pooler." in database_url or database_url.endswith(":6543"):
        return create_engine(
            database_url,
            poolclass=NullPool,
            echo=echo,
        )

    # Direct connection for stationary servers
    return create_engine(
        database_url,
        pool_size=20,
        max_overflow=10,
        pool_pre_ping=True,
        echo=echo,
    )


engine = build_engine(settings.database_url, settings.environment)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Create the users table if it does not exist yet."""
    # Register models on Base.metadata
    from app.models import User  # noqa: F401

    Base.metadata.create_all(bind=bind)
