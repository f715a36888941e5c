"""
Connexion a la base de donnees / Database connection.
Supporte SQLite (dev) et PostgreSQL (prod) via SQLAlchemy 2.0 async.
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from vehicle_service.config import settings

logger = logging.getLogger(__name__)

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

# Configuration moteur / Engine configuration
_engine_kwargs: dict = {
    "echo": settings.DEBUG and settings.LOG_LEVEL.upper() == "DEBUG",
}

# PostgreSQL : pool de connexions / PostgreSQL: connection pooling
if not _is_sqlite:
    _engine_kwargs.update({
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    })

engine = create_async_engine(settings.DATABASE_URL, **_engine_kwargs)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    """Dependance FastAPI pour obtenir une session DB / FastAPI dependency for DB session.

    Une requete = une transaction : commit si succes, rollback sur toute exception.
    One request = one transaction: commit on success, rollback on any exception.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Verifier la connexion puis creer les tables / Check connectivity then create tables."""
    # Enregistrer les modeles dans la metadata / Register models on the metadata
    import vehicle_service.models  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError:
        logger.critical(
            "Database preflight check failed, could not reach %s",
            engine.url.render_as_string(hide_password=True),
        )
        raise
    logger.info("Database ready (%s)", engine.url.get_backend_name())
