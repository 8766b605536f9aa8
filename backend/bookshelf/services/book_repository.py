"""
Bookshelf Backend - Book Repository
=====================================

What:  Data access for the `books` table.
How:   Each method opens its own AsyncSession from the injected session
       factory and runs inside a single transaction (`session.begin()`),
       committed on success and rolled back if anything raises.

Query plans:
    list_all: SELECT * FROM books ORDER BY id
    get:      SELECT * FROM books WHERE id = :id   (primary key lookup)
    save:     merge by primary key; INSERT when the id has no row, else UPDATE
    remove:   DELETE FROM books WHERE id = :id
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bookshelf.models.book import Book


class BookRepository:
    """SQLAlchemy-backed storage for Book rows."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def add(self, book: Book) -> Book:
        async with self._session_factory() as session, session.begin():
            session.add(book)
            # Assigns the autoincrement id before the transaction commits
            await session.flush()
            return book

    async def list_all(self) -> List[Book]:
        async with self._session_factory() as session:
            result = await session.execute(select(Book).order_by(Book.id))
            return list(result.scalars().all())

    async def get(self, book_id: int) -> Optional[Book]:
        async with self._session_factory() as session:
            return await session.get(Book, book_id)

    async def save(self, book: Book) -> Book:
        async with self._session_factory() as session, session.begin():
            merged = await session.merge(book)
            await session.flush()
            return merged

    async def remove(self, book_id: int) -> None:
        async with self._session_factory() as session, session.begin():
            await session.execute(delete(Book).where(Book.id == book_id))
