"""SQLModel tables for the process catalog."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel

LAST_INDEXED_AT_KEY = "last_indexed_at"


class CatalogProcess(SQLModel, table=True):
    __tablename__ = "catalog_processes"  # type: ignore[bad-override]

    process_id: str = Field(primary_key=True)
    description: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    category: str = Field(index=True)
    module: str
    inputs: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    outputs: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    tasks: str = Field(default="[]", sa_column=Column(Text, nullable=False, default="[]"))
    indexed_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))


class CatalogMetadata(SQLModel, table=True):
    __tablename__ = "catalog_metadata"  # type: ignore[bad-override]

    key: str = Field(primary_key=True)
    value: str
