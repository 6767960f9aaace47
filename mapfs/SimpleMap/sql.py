"""
SimpleMap stored in a SQL table.

One row per entry. Writes go into an open transaction that flush()
commits, so the table only changes at explicit durability points.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from sqlalchemy import (
    Column,
    MetaData,
    Table,
    Text,
    create_engine,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mapfs.shared.gate import GateLogger
from mapfs.MapStorage.paths import StorageException

_log = GateLogger.get("SimpleMap")

DEFAULT_TABLE = "mapfs_entries"


def _sqlite_engine_kwargs(database_url: str) -> dict:
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite"):
        return {}

    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
    else:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return kwargs


class SqlMap:
    """
    SimpleMap backed by a (key, value) table.

    Keys are unbounded TEXT, so path length is limited only by the database.
    """

    def __init__(
        self,
        database_url: str = "sqlite:///:memory:",
        table_name: str = DEFAULT_TABLE,
        *,
        echo: bool = False,
    ):
        """
        Connect and create the entry table if needed.

        Args:
            database_url: SQLAlchemy URL of the database
            table_name: Table holding the entries
            echo: Log emitted SQL
        """
        engine_kwargs = {"echo": echo, "pool_pre_ping": True}
        engine_kwargs.update(_sqlite_engine_kwargs(database_url))
        self._engine = create_engine(database_url, **engine_kwargs)

        metadata = MetaData()
        self._table = Table(
            table_name,
            metadata,
            Column("key", Text, primary_key=True),
            Column("value", Text, nullable=False),
        )
        metadata.create_all(self._engine)

        self._session = sessionmaker(bind=self._engine)()
        _log.info(f"Opened table {table_name} at {self._engine.url.render_as_string(hide_password=True)}")

    def contains(self, key: str) -> bool:
        stmt = select(self._table.c.key).where(self._table.c.key == key)
        return self._session.execute(stmt).first() is not None

    def get_string(self, key: str) -> str:
        stmt = select(self._table.c.value).where(self._table.c.key == key)
        value = self._session.execute(stmt).scalar_one_or_none()
        if value is None:
            raise KeyError(key)
        return value

    def put_string(self, key: str, value: str) -> None:
        if self.contains(key):
            stmt = update(self._table).where(self._table.c.key == key).values(value=value)
        else:
            stmt = insert(self._table).values(key=key, value=value)
        self._session.execute(stmt)

    def remove(self, key: str) -> None:
        self._session.execute(delete(self._table).where(self._table.c.key == key))

    def key_list(self) -> List[str]:
        return list(self._session.execute(select(self._table.c.key)).scalars())

    def flush(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise StorageException(f"Cannot commit map: {e}") from e

    def rollback(self) -> None:
        """Discard everything written since the last flush()."""
        self._session.rollback()

    def close(self) -> None:
        """Close the session without committing and release the engine."""
        self._session.close()
        self._engine.dispose()
