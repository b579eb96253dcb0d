"""
Database setup with SQLAlchemy 2.0.
Provides the engine, session factory and base model used by the SQL store.
"""
from datetime import datetime
from pathlib import Path

from sqlalchemy import MetaData, DateTime, String, create_engine, func
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from agroconnect.core.config import Settings
from agroconnect.utils import new_id, utcnow


# Naming convention for constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


class Base(DeclarativeBase):
    """Base class for all database models."""
    metadata = metadata

    # Common columns for all tables
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False
    )


def create_db_engine(settings: Settings) -> Engine:
    """Create the engine for the configured database URL."""
    url = settings.database_url

    if url.startswith("sqlite"):
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            # One shared connection, otherwise every checkout sees an empty database
            return create_engine(
                url,
                echo=settings.db_echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False}
            )
        database = make_url(url).database
        if database:
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            url,
            echo=settings.db_echo,
            connect_args={"check_same_thread": False}
        )

    return create_engine(
        url,
        echo=settings.db_echo,
        pool_pre_ping=True,  # Verify connections before using
        pool_recycle=3600,   # Recycle connections after 1 hour
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to the given engine."""
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False
    )


def init_db(engine: Engine) -> None:
    """Initialize database tables. Use Alembic in production."""
    # Import all models to ensure they're registered
    from agroconnect.models import user, product, message  # noqa: F401

    Base.metadata.create_all(bind=engine)
