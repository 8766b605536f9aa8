"""
Bookshelf Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for books.
How:   Request bodies are decoded explicitly by the handler (so that decode
       failures answer 400 rather than FastAPI's default 422); responses are
       serialized through `response_model`.

Decoding rules:
    - The body must be a JSON object; unknown keys are ignored.
    - Field types are strict: strings stay strings, integers stay integers
      (no "1999" → 1999 coercion).
    - Missing fields take their defaults; an `id` key is never read from a
      body, the server owns identifiers.
    - `null` for title or author reads as "" and `null` for published_year
      as absent; other type mismatches are rejected.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BookBase(BaseModel):
    """Client-supplied book fields, echoed back unchanged."""

    title: str = Field(default="", description="Book title")
    author: str = Field(default="", description="Book author")
    published_year: Optional[int] = Field(
        default=None,
        description="Year of first publication (optional)",
    )

    @field_validator("title", "author", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        """A JSON null string field decodes to its empty default."""
        return "" if value is None else value


class BookCreate(BookBase):
    """Body of POST /books."""

    model_config = ConfigDict(strict=True, extra="ignore")


class BookUpdate(BookBase):
    """Body of PUT /books/{id}. The id always comes from the path."""

    model_config = ConfigDict(strict=True, extra="ignore")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookResponse(BookBase):
    """A stored book, as returned by every read and write endpoint."""

    id: int = Field(description="Server-assigned book identifier")

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Structured error body for validation and not-found errors."""

    error: str = Field(description="Human-readable error description")


class RawErrorResponse(BaseModel):
    """Serialized error object for decoder and business-layer failures."""

    message: str = Field(description="Error message")


class HealthResponse(BaseModel):
    """
    Health check response showing service and database status.
    Returned by GET /health for container probes and load balancers.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
