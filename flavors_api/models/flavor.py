"""
Flavors API — Flavor SQLAlchemy Model
======================================

What:  ORM model representing the `flavors` table.
Who:   Used by the repository for CRUD statements and by the schema
       initializer to drop/create the table.

Table Design:
    - Integer autoincrement primary key (SERIAL on PostgreSQL)
    - name: VARCHAR(255) NOT NULL, the only required column
    - is_favorite: BOOLEAN DEFAULT false
    - created_at / updated_at: TIMESTAMP DEFAULT CURRENT_TIMESTAMP
      (naive timestamps, as written by the store's clock)
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from flavors_api.database import Base


class Flavor(Base):
    """
    An ice cream flavor record.

    Lifecycle:
        1. Inserted by the create operation; the store assigns id and timestamps
        2. Updated wholesale (name, is_favorite) with updated_at refreshed
        3. Deleted by id, or wiped en masse by a schema reset
    """

    __tablename__ = "flavors"

    # sqlite_autoincrement: ids are never reused in the SQLite test store
    # either, matching SERIAL semantics on PostgreSQL
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    is_favorite: Mapped[bool | None] = mapped_column(
        Boolean,
        default=False,
        server_default=text("false"),
    )

    # Server-side defaults only: the store's clock is the single source of time
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Flavor(id={self.id}, name='{self.name}', is_favorite={self.is_favorite})>"
