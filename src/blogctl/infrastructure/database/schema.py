"""SQLAlchemy Core table definitions for the blogctl database.

Every blog object is one row of ``documents``: the category and id form
the primary key and the full object is kept as a JSON document, so the
table never changes when a category gains a field.
"""

from __future__ import annotations

from sqlalchemy import JSON, Column, MetaData, Table, Text

metadata = MetaData()

documents = Table(
    "documents",
    metadata,
    Column("category", Text, primary_key=True),
    Column("id", Text, primary_key=True),
    Column("body", JSON, nullable=False),
)
