import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from student_api.core.errors import AuthenticationFailed, StudentApiError, TokenError, ValidationFailed

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StudentApiError)
    async def student_api_error_handler(request: Request, exc: StudentApiError):
        if exc.http_status >= 500:
            logger.error("%s on %s: %s", exc.code, request.url.path, exc.message)
        else:
            logger.debug("%s on %s: %s", exc.code, request.url.path, exc.message)
        headers = None
        if isinstance(exc, (TokenError, AuthenticationFailed)):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=exc.http_status, content=exc.to_response(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg")}
            for err in exc.errors()
        ]
        failure = ValidationFailed("Request validation failed", details=details)
        logger.debug("Validation error on %s: %s", request.url.path, details)
        return JSONResponse(
            status_code=failure.http_status,
            content=jsonable_encoder(failure.to_response()),
        )
