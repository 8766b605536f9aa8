"""
Bookshelf Backend - Book Service
==================================

What:  Default BookUsecase implementation, backed by BookRepository.
How:   Converts decoded request schemas into ORM rows, delegates to the
       repository, converts rows back into BookResponse objects.
Who:   Constructed by create_app() and injected into BookHandler.

Error Handling Strategy:
    Any exception from the repository is logged with its traceback and
    re-raised as DatabaseError. The client-facing message stays generic;
    the original exception type and the book id go into `context`.
"""

import logging
from typing import List, Optional

from bookshelf.exceptions import DatabaseError
from bookshelf.models.book import Book
from bookshelf.schemas.book import BookCreate, BookResponse, BookUpdate
from bookshelf.services.book_base import BookUsecase
from bookshelf.services.book_repository import BookRepository

logger = logging.getLogger(__name__)


class BookService(BookUsecase):
    """
    Pass-through business layer for books.

    No business rules are applied here; the class exists so that storage
    failures are translated in one place and the handler only ever sees
    BookUsecase semantics.
    """

    def __init__(self, repository: BookRepository):
        self.repository = repository

    async def create(self, data: BookCreate) -> BookResponse:
        try:
            book = await self.repository.add(Book(**data.model_dump()))
        except Exception as e:
            logger.error("Database error creating book: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the book. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Book %d created", book.id)
        return BookResponse.model_validate(book)

    async def get_all(self) -> List[BookResponse]:
        try:
            books = await self.repository.list_all()
        except Exception as e:
            logger.error("Database error listing books: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve books. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [BookResponse.model_validate(book) for book in books]

    async def get_by_id(self, book_id: int) -> Optional[BookResponse]:
        try:
            book = await self.repository.get(book_id)
        except Exception as e:
            logger.error("Database error fetching book %d: %s", book_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the book. Please try again.",
                context={"book_id": book_id, "error_type": type(e).__name__},
            ) from e

        if book is None:
            return None
        return BookResponse.model_validate(book)

    async def update(self, book_id: int, data: BookUpdate) -> BookResponse:
        try:
            book = await self.repository.save(Book(id=book_id, **data.model_dump()))
        except Exception as e:
            logger.error("Database error updating book %d: %s", book_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the book. Please try again.",
                context={"book_id": book_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Book %d updated", book_id)
        return BookResponse.model_validate(book)

    async def delete(self, book_id: int) -> None:
        try:
            await self.repository.remove(book_id)
        except Exception as e:
            logger.error("Database error deleting book %d: %s", book_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the book. Please try again.",
                context={"book_id": book_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Book %d deleted", book_id)
