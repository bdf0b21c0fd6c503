from typing import Iterable
from uuid import UUID
from sqlalchemy import Column, MetaData, Table, Uuid, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from utils.errors import TransientStoreError


DEFAULT_POINT_TABLE = "chunk_metadata"
DEFAULT_POINT_ID_COLUMN = "qdrant_point_id"


class PointRegistry:
    """Read-only view of the rows that own Qdrant points in the system of record."""

    def __init__(self, engine: Engine, table_name: str = DEFAULT_POINT_TABLE, id_column: str = DEFAULT_POINT_ID_COLUMN):
        self.engine = engine
        self.table = Table(table_name, MetaData(), Column(id_column, Uuid(as_uuid=True)))
        self.id_column = self.table.c[id_column]

    @classmethod
    def from_url(cls, database_url: str, pool_size: int = 10, **kwargs) -> "PointRegistry":
        # Fixed-size pool shared by every collection worker.
        engine = create_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=0,
            pool_pre_ping=True,
        )
        return cls(engine, **kwargs)

    def exists(self, point_ids: Iterable[UUID]) -> set[UUID]:
        """Return the subset of point_ids that have a row, using a single query."""
        ids = set(point_ids)
        if not ids:
            return set()

        query = select(self.id_column).where(self.id_column.in_(list(ids)))

        try:
            with self.engine.connect() as conn:
                found = conn.execute(query).scalars().all()
        except SQLAlchemyError as e:
            raise TransientStoreError("point lookup", str(e)) from e

        return {point_id for point_id in found if point_id in ids}

    def dispose(self):
        self.engine.dispose()
