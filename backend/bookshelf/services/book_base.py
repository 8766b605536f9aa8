"""
Bookshelf Backend - Abstract Book Usecase Interface
=====================================================

What:  Abstract base class defining the contract between the HTTP handler
       and whatever owns book persistence.
How:   Concrete implementations inherit from BookUsecase and implement the
       five operations. The handler receives an instance at construction
       time and never looks past this interface.

Implementations:
    - BookService: SQLAlchemy-backed implementation (default)
    - Test doubles in tests/conftest.py (in-memory)
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from bookshelf.schemas.book import BookCreate, BookResponse, BookUpdate


class BookUsecase(ABC):
    """
    Five-operation capability over the Book entity.

    Contract:
        - Failures are raised as exceptions (DownstreamFailureError or a
          subclass); the handler maps any of them to a 500 response.
        - "Not found" on get_by_id is a normal result (None), not an error.
        - No business rules are expected of callers; input arrives already
          structurally decoded.
    """

    @abstractmethod
    async def create(self, data: BookCreate) -> BookResponse:
        """
        Persist a new book and return it with its assigned id.

        Raises:
            DownstreamFailureError: The book could not be stored.
        """
        ...

    @abstractmethod
    async def get_all(self) -> List[BookResponse]:
        """Return every stored book, ordered by id."""
        ...

    @abstractmethod
    async def get_by_id(self, book_id: int) -> Optional[BookResponse]:
        """
        Return the book with `book_id`, or None when there is none.

        Raises:
            DownstreamFailureError: The lookup itself failed.
        """
        ...

    @abstractmethod
    async def update(self, book_id: int, data: BookUpdate) -> BookResponse:
        """
        Store `data` under `book_id` and return the stored book.

        An id with no existing row is stored as a new row with that id.
        """
        ...

    @abstractmethod
    async def delete(self, book_id: int) -> None:
        """Remove the book with `book_id`. Removing a missing id is not an error."""
        ...
