from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import DeclarativeBase

from pharmacy.config import Config


# SQLAlchemy Base for ORM models
class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def get_async_url(url: str, db_type: str) -> str:
    """Convert database URL to async SQLAlchemy format."""
    db_type = db_type.lower()
    if "+" in url.split("://", 1)[0]:
        # Driver already given explicitly
        return url
    if db_type == "postgresql":
        return url.replace("postgresql://", "postgresql+asyncpg://")
    elif db_type == "mysql":
        return url.replace("mysql://", "mysql+aiomysql://")
    elif db_type == "sqlite":
        return url.replace("sqlite://", "sqlite+aiosqlite://")
    return url


def _install_sqlite_locking(engine: AsyncEngine) -> None:
    """Make every SQLite transaction take the write lock at BEGIN.

    pysqlite defers BEGIN until the first write, so two sales could both read
    the same stock level before either one writes. BEGIN IMMEDIATE makes the
    second writer wait until the first one has committed.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, _connection_record):
        # Stop the driver from emitting its own BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str, db_type: str) -> AsyncEngine:
    db_type = db_type.lower()
    connect_args = {}
    if db_type == "sqlite":
        connect_args["timeout"] = Config.SQLITE_BUSY_TIMEOUT

    engine = create_async_engine(
        get_async_url(url, db_type),
        echo=Config.SQL_ECHO,
        connect_args=connect_args
    )
    if db_type == "sqlite":
        _install_sqlite_locking(engine)
    return engine


class Database:
    """Owns the async engine and the session factory."""

    def __init__(self, url: str | None = None, db_type: str | None = None):
        self.url = url or Config.DATABASE_URL
        self.db_type = (db_type or Config.DATABASE_TYPE).lower()
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self):
        """Create database engine."""
        if self.engine:
            return
        self.engine = build_engine(self.url, self.db_type)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def disconnect(self):
        """Close database engine."""
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None

    async def create_tables(self):
        if not self.engine:
            await self.connect()

        # Register every mapped table on Base.metadata
        import pharmacy.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self):
        if not self.engine:
            await self.connect()

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def session(self) -> AsyncSession:
        if not self.session_factory:
            await self.connect()
        return self.session_factory()


db = Database()


async def get_session():
    """FastAPI dependency: one session per request."""
    session = await db.session()
    async with session:
        yield session
