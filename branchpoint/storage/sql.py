"""SQLAlchemy-backed document store"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from branchpoint.core.database import create_session_factory
from branchpoint.db.models import Document
from branchpoint.storage.base import DocumentStore, extract_key, key_attributes, serialize_key

logger = logging.getLogger(__name__)


class SqlDocumentStore(DocumentStore):
    """
    Stores every table in the single ``documents`` table.

    Each operation runs in its own session and commits before returning.
    String conditions are pushed down to SQL through JSON path access;
    any other condition value is matched in Python on the narrowed rows.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: Optional[async_sessionmaker] = None,
    ):
        self.engine = engine
        self.session_factory = session_factory or create_session_factory(engine)

    async def _find(self, session: AsyncSession, table: str, doc_key: str) -> Optional[Document]:
        result = await session.execute(
            select(Document).where(
                Document.collection == table,
                Document.doc_key == doc_key,
            )
        )
        return result.scalar_one_or_none()

    async def get(self, table: str, key: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        doc_key = serialize_key(table, extract_key(table, key))
        async with self.session_factory() as session:
            document = await self._find(session, table, doc_key)
            return dict(document.data) if document else None

    async def put(self, table: str, item: Mapping[str, Any]) -> Dict[str, Any]:
        doc_key = serialize_key(table, extract_key(table, item))
        data = dict(item)
        async with self.session_factory() as session:
            document = await self._find(session, table, doc_key)
            if document is None:
                session.add(Document(collection=table, doc_key=doc_key, data=data))
            else:
                document.data = data
            await session.commit()
        logger.debug(f"Stored {table} record {doc_key}")
        return data

    async def query(self, table: str, **conditions: Any) -> List[Dict[str, Any]]:
        key_attributes(table)
        stmt = select(Document).where(Document.collection == table)
        in_python: Dict[str, Any] = {}
        for name, value in conditions.items():
            if isinstance(value, str):
                stmt = stmt.where(Document.data[name].as_string() == value)
            else:
                in_python[name] = value
        stmt = stmt.order_by(Document.id)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            records = [dict(document.data) for document in result.scalars().all()]

        if in_python:
            records = [
                record
                for record in records
                if all(record.get(name) == value for name, value in in_python.items())
            ]
        return records

    async def update(
        self, table: str, key: Mapping[str, Any], changes: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        doc_key = serialize_key(table, extract_key(table, key))
        async with self.session_factory() as session:
            document = await self._find(session, table, doc_key)
            if document is None:
                return None
            # Reassign so the JSON column is flagged dirty
            merged = {**document.data, **dict(changes)}
            document.data = merged
            await session.commit()
            return merged

    async def close(self) -> None:
        await self.engine.dispose()
