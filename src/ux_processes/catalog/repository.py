"""SQLModel-backed storage for the process catalog."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from types import TracebackType

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, or_
from sqlmodel import Session, SQLModel, col, select

from ux_processes.catalog.indexer import CatalogEntry
from ux_processes.catalog.models import LAST_INDEXED_AT_KEY, CatalogMetadata, CatalogProcess
from ux_processes.catalog.storage import build_sqlite_engine

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 20
_LIKE_ESCAPE = "\\"


class CatalogRepository:
    """Facade that persists catalog entries using SQLModel."""

    def __init__(self, db_path: Path, *, busy_timeout_ms: int = 5_000) -> None:
        self.db_path = db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self.engine = build_sqlite_engine(db_path=db_path, busy_timeout_ms=busy_timeout_ms)

    def __enter__(self) -> CatalogRepository:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self.engine.dispose()

    def init_schema(self) -> None:
        SQLModel.metadata.create_all(
            self.engine,
            tables=[CatalogProcess.__table__, CatalogMetadata.__table__],  # type: ignore[attr-defined]
        )

    def index_processes(
        self,
        entries: Iterable[CatalogEntry],
        *,
        indexed_at: datetime | None = None,
    ) -> int:
        """Replace the catalog with ``entries``; returns the number of rows written."""

        timestamp = indexed_at or datetime.now(tz=UTC)
        written = 0
        with Session(self.engine) as session:
            keep: set[str] = set()
            for entry in entries:
                keep.add(entry.process_id)
                session.merge(
                    CatalogProcess(
                        process_id=entry.process_id,
                        description=entry.description,
                        category=entry.category,
                        module=entry.module,
                        inputs=entry.inputs,
                        outputs=entry.outputs,
                        tasks=json.dumps(entry.tasks, ensure_ascii=False),
                        indexed_at=_to_db_datetime(timestamp),
                    ),
                )
                written += 1
            stale = sa_delete(CatalogProcess)
            if keep:
                stale = stale.where(col(CatalogProcess.process_id).not_in(sorted(keep)))
            session.exec(stale)  # type: ignore[call-overload]
            session.merge(CatalogMetadata(key=LAST_INDEXED_AT_KEY, value=timestamp.isoformat()))
            session.commit()
        logger.info("Catalog indexed: %s processes into %s", written, self.db_path)
        return written

    def get(self, process_id: str) -> CatalogEntry | None:
        with Session(self.engine) as session:
            row = session.get(CatalogProcess, process_id)
            return _to_entry(row) if row is not None else None

    def search(
        self,
        query: str,
        *,
        category: str | None = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> list[CatalogEntry]:
        """Case-insensitive substring search over id, description and category."""

        if limit <= 0:
            raise ValueError("limit must be > 0")
        pattern = f"%{_escape_like(query.strip().lower())}%"
        statement = select(CatalogProcess).where(
            or_(
                func.lower(CatalogProcess.process_id).like(pattern, escape=_LIKE_ESCAPE),
                func.lower(CatalogProcess.description).like(pattern, escape=_LIKE_ESCAPE),
                func.lower(CatalogProcess.category).like(pattern, escape=_LIKE_ESCAPE),
            ),
        )
        if category:
            statement = statement.where(CatalogProcess.category == category)
        statement = statement.order_by(col(CatalogProcess.process_id)).limit(limit)
        with Session(self.engine) as session:
            return [_to_entry(row) for row in session.exec(statement).all()]

    def list_categories(self) -> list[tuple[str, int]]:
        statement = (
            select(CatalogProcess.category, func.count())
            .group_by(CatalogProcess.category)
            .order_by(CatalogProcess.category)
        )
        with Session(self.engine) as session:
            return [(category, int(count)) for category, count in session.exec(statement).all()]

    def last_indexed_at(self) -> datetime | None:
        with Session(self.engine) as session:
            row = session.get(CatalogMetadata, LAST_INDEXED_AT_KEY)
        if row is None:
            return None
        return _to_utc_aware_datetime(datetime.fromisoformat(row.value))


def _to_entry(row: CatalogProcess) -> CatalogEntry:
    tasks = json.loads(row.tasks or "[]")
    return CatalogEntry(
        process_id=row.process_id,
        description=row.description,
        category=row.category,
        module=row.module,
        inputs=row.inputs,
        outputs=row.outputs,
        tasks=[str(name) for name in tasks] if isinstance(tasks, list) else [],
        indexed_at=_to_utc_aware_datetime(row.indexed_at),
    )


def _escape_like(value: str) -> str:
    for char in (_LIKE_ESCAPE, "%", "_"):
        value = value.replace(char, _LIKE_ESCAPE + char)
    return value


def _to_db_datetime(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def _to_utc_aware_datetime(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
