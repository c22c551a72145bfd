"""Database-oriented helpers for favorite flags."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import inspect, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pokedex.db.connection import session_scope
from pokedex.db.models import FavoriteFlag, utcnow


class FavoritesPersistence:
    """Encapsulates SQLAlchemy operations required by the favorite store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._tables_ready: bool | None = None

    async def tables_ready(self) -> bool:
        """Check if the flag table exists, caching successes on the instance."""

        if self._tables_ready is True:
            return True

        def _check_tables(sync_session) -> bool:
            engine = sync_session.get_bind()
            if engine is None:
                return False
            inspector = inspect(engine)
            return FavoriteFlag.__tablename__ in set(inspector.get_table_names())

        async with self._session_factory() as session:
            ready = await session.run_sync(_check_tables)

        self._tables_ready = ready
        return ready

    async def read_flags(self, identities: Iterable[str]) -> dict[str, bool]:
        """Return persisted flags for the requested identities."""

        wanted = list(identities)
        if not wanted:
            return {}

        query = select(FavoriteFlag.identity, FavoriteFlag.is_favorite).where(
            FavoriteFlag.identity.in_(wanted)
        )
        async with self._session_factory() as session:
            result = await session.execute(query)
            return {identity: bool(flag) for identity, flag in result.all()}

    async def write_flag(self, identity: str, name: str, value: bool) -> None:
        """Insert or update the flag row for ``identity``."""

        statement = sqlite_insert(FavoriteFlag).values(
            identity=identity, name=name, is_favorite=value, updated_at=utcnow()
        )
        statement = statement.on_conflict_do_update(
            index_elements=[FavoriteFlag.identity],
            set_={
                "name": statement.excluded.name,
                "is_favorite": statement.excluded.is_favorite,
                "updated_at": statement.excluded.updated_at,
            },
        )
        async with session_scope(self._session_factory) as session:
            await session.execute(statement)
