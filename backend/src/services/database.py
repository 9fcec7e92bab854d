"""SQLAlchemy-backed vocabulary store."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, List

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ..models.sqlalchemy_base import Base, TermObjectRecord, TermRecord
from ..models.term import Term, normalize_term
from ..utils.exceptions import StoreError, UnknownTermIdError
from ..utils.logging import log_error, log_info
from ..utils.metrics import STORE_OPERATION_DURATION, track_time
from .interfaces import VocabularyStoreInterface

# Range of a signed 64-bit INTEGER primary key
MAX_TERM_ID = 2 ** 63 - 1


def valid_term_id(term_id: int) -> bool:
    """Whether an id fits the primary key column."""
    return 0 < term_id <= MAX_TERM_ID


class SQLVocabularyStore(VocabularyStoreInterface):
    """Vocabulary persisted through SQLAlchemy.

    Every operation runs in its own session; writes run in a single
    transaction so a merge group commits or rolls back as a whole.
    """

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize store.

        Args:
            database_url: Async SQLAlchemy URL, e.g. ``sqlite+aiosqlite:///tags.db``
            echo: Log emitted SQL
        """
        self.database_url = database_url
        self.engine = create_async_engine(database_url, echo=echo)
        self._session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    async def initialize(self) -> None:
        """Create tables if they do not exist."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            log_info("Vocabulary store initialized", {"url": self.engine.url.render_as_string()})
        except SQLAlchemyError as e:
            log_error(f"Failed to initialize vocabulary store: {str(e)}")
            raise StoreError("Failed to initialize vocabulary store", details={"error": str(e)}) from e

    async def cleanup(self) -> None:
        """Dispose of pooled connections."""
        await self.engine.dispose()

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            log_error(f"Vocabulary store {operation} failed: {str(e)}")
            raise StoreError(
                f"Vocabulary store {operation} failed",
                details={"operation": operation, "error": str(e)}
            ) from e

    def _term_query(self):
        count = func.count(TermObjectRecord.object_id)
        return (
            select(TermRecord.id, TermRecord.term_display, TermRecord.term_searchable, count)
            .outerjoin(TermObjectRecord, TermObjectRecord.term_id == TermRecord.id)
            .group_by(TermRecord.id, TermRecord.term_display, TermRecord.term_searchable)
            .order_by(TermRecord.term_searchable, TermRecord.id)
        )

    @staticmethod
    def _to_term(row) -> Term:
        term_id, display, searchable, count = row
        return Term(id=term_id, display_text=display, searchable_text=searchable, count=count)

    async def _count_bound(self, aggregate) -> int:
        counts = (
            select(func.count(TermObjectRecord.object_id).label("n"))
            .select_from(TermRecord)
            .outerjoin(TermObjectRecord, TermObjectRecord.term_id == TermRecord.id)
            .group_by(TermRecord.id)
            .subquery()
        )
        async with self._session("count_bound") as session:
            value = await session.scalar(select(aggregate(counts.c.n)))
        return value or 0

    @track_time(STORE_OPERATION_DURATION, {"operation": "get_tree"})
    async def get_tree(self, order: str = "display_text asc") -> List[Term]:
        async with self._session("get_tree") as session:
            result = await session.execute(self._term_query())
            return [self._to_term(row) for row in result]

    @track_time(STORE_OPERATION_DURATION, {"operation": "get_search"})
    async def get_search(self, query: str, order: str = "display_text asc") -> List[Term]:
        needle = normalize_term(query)
        stmt = self._term_query()
        if needle:
            stmt = stmt.where(TermRecord.term_searchable.contains(needle, autoescape=True))
        async with self._session("get_search") as session:
            result = await session.execute(stmt)
            return [self._to_term(row) for row in result]

    async def max_count(self) -> int:
        return await self._count_bound(func.max)

    async def min_count(self) -> int:
        return await self._count_bound(func.min)

    @track_time(STORE_OPERATION_DURATION, {"operation": "get_by_id"})
    async def get_by_id(self, term_id: int) -> Term:
        if not valid_term_id(term_id):
            raise UnknownTermIdError(term_id)
        async with self._session("get_by_id") as session:
            result = await session.execute(self._term_query().where(TermRecord.id == term_id))
            row = result.first()
        if row is None:
            raise UnknownTermIdError(term_id)
        return self._to_term(row)

    @track_time(STORE_OPERATION_DURATION, {"operation": "delete_term"})
    async def delete_term(self, term: Term) -> None:
        async with self._session("delete_term") as session:
            async with session.begin():
                await session.execute(delete(TermObjectRecord).where(TermObjectRecord.term_id == term.id))
                await session.execute(delete(TermRecord).where(TermRecord.id == term.id))

    @track_time(STORE_OPERATION_DURATION, {"operation": "merge"})
    async def merge(self, canonical_name: str, names: List[str]) -> None:
        async with self._session("merge") as session:
            async with session.begin():
                target = await session.scalar(
                    select(TermRecord).where(TermRecord.term_searchable == normalize_term(canonical_name))
                )
                searchable = {normalize_term(name) for name in names}
                source_ids = set(await session.scalars(
                    select(TermRecord.id).where(TermRecord.term_searchable.in_(searchable))
                ))

                if target is None:
                    target = TermRecord(
                        term_display=canonical_name,
                        term_searchable=normalize_term(canonical_name)
                    )
                    session.add(target)
                    await session.flush()
                else:
                    target.term_display = canonical_name
                    source_ids.discard(target.id)

                if not source_ids:
                    return

                existing = set(await session.scalars(
                    select(TermObjectRecord.object_id).where(TermObjectRecord.term_id == target.id)
                ))
                moving = set(await session.scalars(
                    select(TermObjectRecord.object_id).where(TermObjectRecord.term_id.in_(source_ids))
                ))

                await session.execute(delete(TermObjectRecord).where(TermObjectRecord.term_id.in_(source_ids)))
                await session.execute(delete(TermRecord).where(TermRecord.id.in_(source_ids)))
                session.add_all(
                    TermObjectRecord(term_id=target.id, object_id=object_id)
                    for object_id in sorted(moving - existing)
                )

    @track_time(STORE_OPERATION_DURATION, {"operation": "add_term"})
    async def add_term(self, display_text: str, objects: Iterable[str] = ()) -> Term:
        searchable = normalize_term(display_text)
        async with self._session("add_term") as session:
            async with session.begin():
                record = await session.scalar(select(TermRecord).where(TermRecord.term_searchable == searchable))
                if record is None:
                    record = TermRecord(term_display=display_text, term_searchable=searchable)
                    session.add(record)
                    await session.flush()
                existing = set(await session.scalars(
                    select(TermObjectRecord.object_id).where(TermObjectRecord.term_id == record.id)
                ))
                session.add_all(
                    TermObjectRecord(term_id=record.id, object_id=object_id)
                    for object_id in dict.fromkeys(objects)
                    if object_id not in existing
                )
                term_id = record.id
        return await self.get_by_id(term_id)

    @track_time(STORE_OPERATION_DURATION, {"operation": "tag_object"})
    async def tag_object(self, term_id: int, object_id: str) -> None:
        if not valid_term_id(term_id):
            raise UnknownTermIdError(term_id)
        async with self._session("tag_object") as session:
            async with session.begin():
                if await session.get(TermRecord, term_id) is None:
                    raise UnknownTermIdError(term_id)
                exists = await session.get(TermObjectRecord, (term_id, object_id))
                if exists is None:
                    session.add(TermObjectRecord(term_id=term_id, object_id=object_id))
