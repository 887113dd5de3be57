"""Map application exceptions to HTTP responses

HTTP responses:
    400: ValidationError (bad shorten request)
    401: AuthenticationError (wrong or missing X-API-KEY)
    404: NotFoundError (no live link for the code)
    500: DataStoreError, RandomSourceError, CodeExhaustedError and anything
         unexpected. The cause is logged, never sent to the client.

Response body:
    {"error": "<message>", "errorCode": "<error code>"}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from localshortener.constants import INVALID_REQUEST, SHORT_LINK_NOT_FOUND, WRONG_API_KEY, UNKNOWN_INTERNAL_SERVER_ERROR
from localshortener.dao.exceptions import DataStoreError
from localshortener.exceptions import (
    AuthenticationError,
    CodeExhaustedError,
    LocalShortenerError,
    NotFoundError,
    RandomSourceError,
    ValidationError,
)


logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, error_code: str | None = None) -> JSONResponse:
    body = {'error': message}
    if error_code:
        body['errorCode'] = error_code
    return JSONResponse(status_code=status_code, content=body)


def response_500() -> JSONResponse:
    return error_response(500, 'Internal Server Error')


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info(
        'Invalid shorten request. Responding with 400.',
        extra={'event': INVALID_REQUEST, 'reason': str(exc)},
    )
    return error_response(400, str(exc), exc.error_code)


async def handle_authentication_error(request: Request, exc: AuthenticationError) -> JSONResponse:
    logger.info(
        'Wrong API key. Responding with 401.',
        extra={'event': WRONG_API_KEY, 'method': request.method, 'path': request.url.path},
    )
    return error_response(401, str(exc), exc.error_code)


async def handle_not_found_error(request: Request, exc: NotFoundError) -> JSONResponse:
    code = request.path_params.get('code')
    logger.info(
        'Short link not found. Responding with 404.',
        extra={'event': SHORT_LINK_NOT_FOUND, 'code': code},
    )
    return error_response(404, 'not found', exc.error_code)


async def handle_internal_error(request: Request, exc: LocalShortenerError) -> JSONResponse:
    logger.error(
        'Request failed with %s. Responding with 500.',
        type(exc).__name__,
        exc_info=exc,
        extra={'errorCode': exc.error_code, 'method': request.method, 'path': request.url.path},
    )
    return response_500()


async def handle_unknown_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        'Unhandled exception. Responding with 500.',
        exc_info=exc,
        extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR, 'method': request.method, 'path': request.url.path},
    )
    return response_500()


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(AuthenticationError, handle_authentication_error)
    app.add_exception_handler(NotFoundError, handle_not_found_error)
    app.add_exception_handler(DataStoreError, handle_internal_error)
    app.add_exception_handler(RandomSourceError, handle_internal_error)
    app.add_exception_handler(CodeExhaustedError, handle_internal_error)
    app.add_exception_handler(Exception, handle_unknown_error)
