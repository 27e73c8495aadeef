"""Error rendering for the API.

All API errors use a consistent response format:
{
    "error": "error_code",
    "message": "Human-readable description",
    ...additional context fields
}
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from rift_radio.core.result import Ok, Result
from rift_radio.exceptions import CatalogError

# Context attributes copied into the response body when present
_CONTEXT_FIELDS = ("track_id", "playlist_id", "name")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    message: str


def unwrap[T](result: Result[T]) -> T:
    """Return the value of ``Ok`` or raise the error for the handlers below."""
    match result:
        case Ok(value=value):
            return value
        case CatalogError() as error:
            raise error
    raise TypeError(f"Not a result: {result!r}")


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on the FastAPI app."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        """Generic handler for all CatalogError subclasses."""
        content: dict[str, str | int | None] = {
            "error": exc.error_code,
            "message": exc.message,
        }

        for field in _CONTEXT_FIELDS:
            value = getattr(exc, field, None)
            if value is not None:
                content[field] = value

        return JSONResponse(status_code=exc.status_code, content=content)
