"""Key-indexed persistent store over the ORM tables.

A thin CRUD layer with no business logic: records go in and come out as
Pydantic schemas, keyed by collection name and id. Every call runs in its own
transaction, so a single put either fully lands or raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy import JSON, func, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from liftlog.db.base import Base
from liftlog.models import PersonalRecordRow, WorkoutSessionRow, WorkoutTemplateRow
from liftlog.schemas.record import PersonalRecord
from liftlog.schemas.template import WorkoutTemplate
from liftlog.schemas.workout import Session

SESSIONS = "sessions"
PERSONAL_RECORDS = "personal_records"
TEMPLATES = "templates"


@dataclass(slots=True, frozen=True)
class Collection:
    model: type[Base]
    schema: type[BaseModel]


COLLECTIONS: dict[str, Collection] = {
    SESSIONS: Collection(WorkoutSessionRow, Session),
    PERSONAL_RECORDS: Collection(PersonalRecordRow, PersonalRecord),
    TEMPLATES: Collection(WorkoutTemplateRow, WorkoutTemplate),
}


class Store:
    """put / get / query_by_range / find / delete / count over named collections."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    @staticmethod
    def _collection(name: str) -> Collection:
        try:
            return COLLECTIONS[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    @staticmethod
    def _column(coll: Collection, field: str):
        column = coll.model.__table__.columns.get(field)
        if column is None:
            raise ValueError(f"Unknown field {field!r} for {coll.model.__tablename__}")
        return getattr(coll.model, field)

    @staticmethod
    def _to_row(coll: Collection, record: BaseModel) -> Base:
        # JSON columns take the JSON-mode dump (nested datetimes as ISO strings);
        # typed columns take native values.
        plain = record.model_dump()
        as_json = record.model_dump(mode="json")
        data: dict[str, Any] = {}
        for column in coll.model.__table__.columns:
            source = as_json if isinstance(column.type, JSON) else plain
            data[column.key] = source[column.key]
        return coll.model(**data)

    async def put(self, collection: str, record: BaseModel) -> None:
        """Insert or replace the record with the same id."""
        coll = self._collection(collection)
        if not isinstance(record, coll.schema):
            raise TypeError(f"{collection} expects {coll.schema.__name__}, got {type(record).__name__}")
        async with self._session_maker() as db:
            try:
                await db.merge(self._to_row(coll, record))
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    async def get(self, collection: str, record_id: str) -> Any | None:
        coll = self._collection(collection)
        async with self._session_maker() as db:
            row = await db.get(coll.model, record_id)
            return coll.schema.model_validate(row) if row is not None else None

    async def query_by_range(
        self,
        collection: str,
        field: str,
        start: Any | None = None,
        end: Any | None = None,
    ) -> list[Any]:
        """Records with start <= field <= end (either bound may be open), ordered by field."""
        coll = self._collection(collection)
        column = self._column(coll, field)
        stmt = select(coll.model)
        if start is not None:
            stmt = stmt.where(column >= start)
        if end is not None:
            stmt = stmt.where(column <= end)
        stmt = stmt.order_by(column, coll.model.id)
        async with self._session_maker() as db:
            result = await db.execute(stmt)
            return [coll.schema.model_validate(r) for r in result.scalars().all()]

    async def find(self, collection: str, **equals: Any) -> list[Any]:
        """Records whose fields equal the given values (None matches NULL)."""
        coll = self._collection(collection)
        stmt = select(coll.model)
        for field, value in equals.items():
            column = self._column(coll, field)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        stmt = stmt.order_by(coll.model.id)
        async with self._session_maker() as db:
            result = await db.execute(stmt)
            return [coll.schema.model_validate(r) for r in result.scalars().all()]

    async def delete(self, collection: str, record_id: str) -> bool:
        coll = self._collection(collection)
        async with self._session_maker() as db:
            row = await db.get(coll.model, record_id)
            if row is None:
                return False
            await db.delete(row)
            await db.commit()
            return True

    async def count(self, collection: str) -> int:
        coll = self._collection(collection)
        async with self._session_maker() as db:
            result = await db.execute(select(func.count()).select_from(coll.model))
            return int(result.scalar_one())

    async def ping(self) -> None:
        """Round-trip to the database (readiness checks)."""
        async with self._session_maker() as db:
            await db.execute(text("SELECT 1"))


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables (local SQLite / tests; Alembic manages production schemas)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
