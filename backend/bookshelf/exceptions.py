"""
Bookshelf Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the book API.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by the book handler and the service layer.

Exception Hierarchy:
    BookshelfError (base)
    ├── MalformedInputError          → 400 {"error": message}
    │   └── UndecodableBodyError     → 400 {"message": message}
    ├── BookNotFoundError            → 404 {"error": "Book not found"}
    └── DownstreamFailureError       → 500 {"message": message}
        └── DatabaseError            → 500 {"message": message}

Response shapes:
    Validation failures the handler detects itself answer with a structured
    {"error": ...} body. Errors coming from a decoder or from the business
    layer are serialized as the error object itself ({"message": ...}).
"""

from typing import Any, Dict, Optional


class BookshelfError(Exception):
    """
    Base exception for all Bookshelf application errors.

    Attributes:
        message:  Client-facing error description (returned in API responses)
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MalformedInputError(BookshelfError):
    """
    Raised when the request fails structural validation.

    When:    Path id is not an integer, or a create body cannot be decoded.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Invalid input",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UndecodableBodyError(MalformedInputError):
    """
    Raised when an update body cannot be decoded into a book.

    HTTP:    400 Bad Request, with the decoder error as the response body.
    """


class BookNotFoundError(BookshelfError):
    """
    Raised by the handler when the business layer finds no book for an id.

    The business layer itself signals "not found" by returning None; this
    exception only exists to route the empty result to a 404 response.
    """

    def __init__(self, book_id: Optional[int] = None):
        ctx: Dict[str, Any] = {}
        if book_id is not None:
            ctx["book_id"] = book_id
        super().__init__(message="Book not found", context=ctx)
        self.book_id = book_id


class DownstreamFailureError(BookshelfError):
    """
    Raised when the business layer fails to complete an operation.

    HTTP:    500 Internal Server Error. No retry is attempted.
    """

    def __init__(
        self,
        message: str = "The operation could not be completed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(DownstreamFailureError):
    """
    Raised when a database query, insert, update or delete fails.

    The message returned to the client is generic. The original error type
    and details go into `context` and are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
