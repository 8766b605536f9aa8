"""
Bookshelf Backend - Book Route Handlers
=========================================

What:  The five book endpoints: POST/GET /books, GET/PUT/DELETE /books/{id}.
How:   BookHandler is constructed with a BookUsecase and exposes an APIRouter
       with its methods bound as endpoints. Handlers decode the request,
       call the usecase once and encode the result.

Validation performed here (structural only):
    - Path id: base-10 integer with optional sign, within signed 64-bit range
    - Body: JSON object decodable into BookCreate / BookUpdate

Bodies and path ids are decoded by hand instead of through FastAPI's
parameter declarations, so that failures answer 400 with the bodies below
instead of FastAPI's 422 validation payload.

Error mapping:
    bad id                  → MalformedInputError("Invalid ID")     → 400
    bad create body         → MalformedInputError("Invalid input")  → 400
    bad update body         → UndecodableBodyError(<decoder text>)   → 400
    get_by_id returned None → BookNotFoundError                     → 404
    usecase raised          → propagated                            → 500
"""

import logging
import re
from typing import Any, Dict, List, Type, TypeVar

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel, ValidationError

from bookshelf.exceptions import BookNotFoundError, MalformedInputError, UndecodableBodyError
from bookshelf.schemas.book import (
    BookCreate,
    BookResponse,
    BookUpdate,
    ErrorResponse,
    RawErrorResponse,
)
from bookshelf.services.book_base import BookUsecase

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def parse_book_id(raw: str) -> int:
    """Parse a path segment as a book id, raising MalformedInputError on failure."""
    if not _ID_PATTERN.fullmatch(raw):
        raise MalformedInputError(message="Invalid ID", context={"raw_id": raw})
    value = int(raw)
    if not _ID_MIN <= value <= _ID_MAX:
        raise MalformedInputError(message="Invalid ID", context={"raw_id": raw})
    return value


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic's error list into one line, e.g. "title: Input should be a valid string"."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


async def decode_body(request: Request, model: Type[PayloadT]) -> PayloadT:
    """
    Decode the request body into `model`.

    An empty body decodes as an empty object, so every field takes its
    default. Raises pydantic's ValidationError for anything that is not a
    JSON object of the right field types.
    """
    body = await request.body()
    if not body.strip():
        body = b"{}"
    return model.model_validate_json(body)


def _json_body(schema: Type[BaseModel]) -> Dict[str, Any]:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


class BookHandler:
    """
    HTTP adapter over a BookUsecase.

    The usecase is the handler's only state. Routes are registered on
    `self.router` at construction; include it in an app with
    `app.include_router(handler.router)`.
    """

    def __init__(self, usecase: BookUsecase):
        self.usecase = usecase
        self.router = APIRouter(tags=["Books"])

        self.router.add_api_route(
            "/books",
            self.create,
            methods=["POST"],
            status_code=201,
            response_model=BookResponse,
            responses={
                400: {"description": "Body is not a decodable book", "model": ErrorResponse},
                500: {"description": "Book could not be stored", "model": RawErrorResponse},
            },
            summary="Create a new book",
            description="Create a new book with the input payload. The id is assigned by the server.",
            openapi_extra=_json_body(BookCreate),
        )
        self.router.add_api_route(
            "/books",
            self.get_all,
            methods=["GET"],
            response_model=List[BookResponse],
            responses={
                500: {"description": "Books could not be read", "model": RawErrorResponse},
            },
            summary="Get all books",
            description="Retrieve a list of all books.",
        )
        self.router.add_api_route(
            "/books/{book_id}",
            self.get_by_id,
            methods=["GET"],
            response_model=BookResponse,
            responses={
                400: {"description": "Id is not an integer", "model": ErrorResponse},
                404: {"description": "No book with this id", "model": ErrorResponse},
                500: {"description": "Book could not be read", "model": RawErrorResponse},
            },
            summary="Get book by ID",
            description="Get a single book by its ID.",
        )
        self.router.add_api_route(
            "/books/{book_id}",
            self.update,
            methods=["PUT"],
            response_model=BookResponse,
            responses={
                400: {"description": "Id is not an integer, or body is not a decodable book"},
                500: {"description": "Book could not be stored", "model": RawErrorResponse},
            },
            summary="Update a book",
            description=(
                "Update a book's information by its ID. The id in the path always wins "
                "over any id in the body."
            ),
            openapi_extra=_json_body(BookUpdate),
        )
        self.router.add_api_route(
            "/books/{book_id}",
            self.delete,
            methods=["DELETE"],
            status_code=204,
            response_class=Response,
            responses={
                400: {"description": "Id is not an integer", "model": ErrorResponse},
                500: {"description": "Book could not be deleted", "model": RawErrorResponse},
            },
            summary="Delete a book",
            description="Delete a book by its ID.",
        )

    async def create(self, request: Request) -> BookResponse:
        try:
            data = await decode_body(request, BookCreate)
        except ValidationError as e:
            raise MalformedInputError(
                message="Invalid input",
                context={"errors": describe_validation_error(e)},
            )

        return await self.usecase.create(data)

    async def get_all(self) -> List[BookResponse]:
        return await self.usecase.get_all()

    async def get_by_id(self, book_id: str) -> BookResponse:
        parsed_id = parse_book_id(book_id)

        book = await self.usecase.get_by_id(parsed_id)
        if book is None:
            raise BookNotFoundError(book_id=parsed_id)
        return book

    async def update(self, book_id: str, request: Request) -> BookResponse:
        parsed_id = parse_book_id(book_id)

        try:
            data = await decode_body(request, BookUpdate)
        except ValidationError as e:
            raise UndecodableBodyError(message=describe_validation_error(e))

        book = await self.usecase.update(parsed_id, data)
        # The stored book always answers with the path id
        return book.model_copy(update={"id": parsed_id})

    async def delete(self, book_id: str) -> Response:
        parsed_id = parse_book_id(book_id)

        await self.usecase.delete(parsed_id)
        return Response(status_code=204)
