"""Engine, session factory and the per-request session dependency."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from daymark_server.config import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    options: dict = {"echo": settings.database_echo, "pool_pre_ping": True}
    if settings.database_url.startswith("sqlite"):
        # aiosqlite runs the connection on a worker thread
        options["connect_args"] = {"check_same_thread": False}
    return create_async_engine(settings.database_url, **options)


engine = build_engine(get_settings())

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Rows stay readable while the response is serialized
    autoflush=False,  # Services flush explicitly
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, committed once after the endpoint returns.

    Services only flush. Any exception rolls back every write the request
    made, so multi-step operations such as promotion are all-or-nothing.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
