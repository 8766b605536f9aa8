"""
Bookshelf Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.

Fixtures:
    ├── fake_usecase: In-memory BookUsecase that records every call
    ├── test_client: HTTPX AsyncClient over an app wired to fake_usecase
    ├── sqlite_engine: Fresh in-memory SQLite database with the schema created
    ├── book_repository / book_service: Real data layer over sqlite_engine
    ├── integration_client: HTTPX AsyncClient over an app wired to book_service
    └── mock_repository: AsyncMock standing in for BookRepository
"""

import os

# Settings are read at import time; point them at SQLite before any
# bookshelf import so no test touches a real server database.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

from typing import Dict, List, Optional  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bookshelf.database import build_engine, build_session_factory, create_tables  # noqa: E402
from bookshelf.exceptions import DatabaseError  # noqa: E402
from bookshelf.main import create_app  # noqa: E402
from bookshelf.schemas.book import BookCreate, BookResponse, BookUpdate  # noqa: E402
from bookshelf.services.book_base import BookUsecase  # noqa: E402
from bookshelf.services.book_repository import BookRepository  # noqa: E402
from bookshelf.services.book_service import BookService  # noqa: E402


class FakeBookUsecase(BookUsecase):
    """
    In-memory BookUsecase for handler tests.

    Every call is appended to `calls` as (operation, args...). Setting
    `failure` to an exception makes every operation raise it.
    """

    def __init__(self):
        self.books: Dict[int, BookResponse] = {}
        self.calls: List[tuple] = []
        self.failure: Optional[Exception] = None
        self._next_id = 1

    def seed(self, **fields) -> BookResponse:
        book = BookResponse(id=self._next_id, **fields)
        self.books[book.id] = book
        self._next_id += 1
        return book

    def _check(self) -> None:
        if self.failure is not None:
            raise self.failure

    async def create(self, data: BookCreate) -> BookResponse:
        self.calls.append(("create", data))
        self._check()
        return self.seed(**data.model_dump())

    async def get_all(self) -> List[BookResponse]:
        self.calls.append(("get_all",))
        self._check()
        return list(self.books.values())

    async def get_by_id(self, book_id: int) -> Optional[BookResponse]:
        self.calls.append(("get_by_id", book_id))
        self._check()
        return self.books.get(book_id)

    async def update(self, book_id: int, data: BookUpdate) -> BookResponse:
        self.calls.append(("update", book_id, data))
        self._check()
        book = BookResponse(id=book_id, **data.model_dump())
        self.books[book_id] = book
        return book

    async def delete(self, book_id: int) -> None:
        self.calls.append(("delete", book_id))
        self._check()
        self.books.pop(book_id, None)


@pytest.fixture
def fake_usecase():
    return FakeBookUsecase()


@pytest.fixture
def downstream_error():
    """The error the fake usecase raises to simulate a storage failure."""
    return DatabaseError(message="Could not reach the book store.")


@pytest_asyncio.fixture
async def test_client(fake_usecase):
    """
    HTTPX AsyncClient talking to an app wired to the fake usecase.

    raise_app_exceptions=False keeps a failure outside the middleware stack
    from aborting the test; such failures still answer 500.
    """
    app = create_app(usecase=fake_usecase)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sqlite_engine():
    """
    A private in-memory SQLite database with the books table created.

    StaticPool keeps the single connection alive so every session sees
    the same in-memory database.
    """
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def book_repository(sqlite_engine):
    return BookRepository(build_session_factory(sqlite_engine))


@pytest.fixture
def book_service(book_repository):
    return BookService(book_repository)


@pytest_asyncio.fixture
async def integration_client(book_service):
    app = create_app(usecase=book_service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_repository():
    """
    AsyncMock shaped like BookRepository.

    Usage:
        mock_repository.get.side_effect = OSError("connection reset")
        await BookService(mock_repository).get_by_id(1)
    """
    repository = AsyncMock(spec=BookRepository)
    return repository
