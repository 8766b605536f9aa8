"""
Bookshelf Backend - Book SQLAlchemy Model
===========================================

What:  ORM model representing the `books` table.
Who:   Used by BookRepository for CRUD operations and by Alembic for schema management.

Table Design:
    - id: autoincrement integer primary key, assigned by the database on insert
    - title / author: free text supplied by the client, stored as-is
    - published_year: optional integer, no range rules
"""

from typing import Optional

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.database import Base


class Book(Base):
    """
    A book row.

    Lifecycle:
        1. Inserted on POST /books (id assigned by the database)
        2. Overwritten field-by-field on PUT /books/{id}
        3. Removed on DELETE /books/{id}
    """

    __tablename__ = "books"

    # 64-bit like the path ids; SQLite only autoincrements an INTEGER primary key
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    author: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    published_year: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        default=None,
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', author='{self.author}')>"
