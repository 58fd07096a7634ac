"""Service errors and exception handlers with request_id in responses."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.pnrelease.core.logging import get_logger
from src.pnrelease.workflow.errors import EmployeeNotSetError, ReleaseFlowError

logger = get_logger(__name__)


class EntityNotFoundError(LookupError):
    """Requested entity does not exist."""


class EntityAlreadyExistsError(ValueError):
    """Entity with the same unique key already exists."""


class BlankValueNotAllowedError(ValueError):
    """A mandatory text value is blank."""


class ConcurrentUpdateError(RuntimeError):
    """Another transaction changed the same workflow first. Reload and retry."""


def _error_response(status_code: int, detail: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(422, jsonable_encoder(exc.errors()))

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(EntityAlreadyExistsError)
    async def already_exists_handler(
        request: Request, exc: EntityAlreadyExistsError
    ) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(BlankValueNotAllowedError)
    async def blank_value_handler(
        request: Request, exc: BlankValueNotAllowedError
    ) -> JSONResponse:
        return _error_response(422, str(exc))

    @app.exception_handler(ConcurrentUpdateError)
    async def concurrent_update_handler(
        request: Request, exc: ConcurrentUpdateError
    ) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(ReleaseFlowError)
    async def release_flow_handler(request: Request, exc: ReleaseFlowError) -> JSONResponse:
        if isinstance(exc, EmployeeNotSetError):
            return _error_response(
                status.HTTP_409_CONFLICT,
                {
                    "message": str(exc),
                    "role": exc.role.value if exc.role is not None else None,
                },
            )
        return _error_response(422, str(exc))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
