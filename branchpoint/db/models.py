"""Database models for the SQL-backed document store"""
from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from branchpoint.core.database import Base


class Document(Base):
    """
    One stored record of any table.

    ``collection`` is the logical table name, ``doc_key`` the serialized
    primary key of the record and ``data`` the record itself. The
    autoincrement ``id`` preserves insertion order for queries.
    """
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(64), nullable=False)
    doc_key = Column(String(512), nullable=False)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("collection", "doc_key", name="uq_documents_collection_key"),
        Index("idx_documents_collection", "collection"),
    )

    def __repr__(self) -> str:
        return f"<Document(collection='{self.collection}', key='{self.doc_key}')>"
