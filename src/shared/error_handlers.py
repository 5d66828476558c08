"""FastAPI exception handlers for the application errors.

Protean's handlers cover its own exceptions (validation failures, missing
records). These add the status codes for the errors in ``shared.errors``.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from shared.errors import ApplicationError, AuthenticationError, ConflictError, ForbiddenError

_STATUS_CODES = {
    ConflictError: 409,
    ForbiddenError: 403,
    AuthenticationError: 401,
}


def _application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    status_code = _STATUS_CODES.get(type(exc), 400)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content={"error": exc.messages}, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for error_class in _STATUS_CODES:
        app.add_exception_handler(error_class, _application_error_handler)
