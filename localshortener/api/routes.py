import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from localshortener.api.dependencies import get_dao, get_service, require_api_key
from localshortener.constants import SHORT_LINK_CREATED, SHORT_LINK_DELETED, SHORT_LINK_REDIRECTED
from localshortener.dao.base import KeyValueBaseDAO
from localshortener.services import ShortLinkService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get('/api/health')
def health(dao: Annotated[KeyValueBaseDAO, Depends(get_dao)]) -> JSONResponse:
    if dao.healthcheck(raise_error=False):
        return JSONResponse(status_code=status.HTTP_200_OK, content={'status': 'ok'})
    logger.warning('Store healthcheck failed. Responding with 503.')
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={'status': 'unavailable'})


@router.post('/api/shorten', status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_api_key)])
def shorten(
    service: Annotated[ShortLinkService, Depends(get_service)],
    url: Annotated[str, Form()] = '',
    custom: Annotated[str, Form()] = '',
    expiry: Annotated[str, Form()] = '',
) -> dict[str, str]:
    """Shorten a URL

    Form fields:
        url: destination URL (required)
        custom: desired short code (optional, overwrites an existing link)
        expiry: minutes until the link expires (optional, positive integer)

    HTTP responses:
        201: {"short_code": "<code>"}
        400: invalid url or expiry
        401: wrong api key
    """
    code = service.create(url, custom_code=custom, expiry=expiry)
    logger.info(
        'Short link created. Responding with 201.',
        extra={'event': SHORT_LINK_CREATED, 'code': code, 'expiry': expiry or None},
    )
    return {'short_code': code}


@router.get('/api/shorten/{code}', dependencies=[Depends(require_api_key)])
def describe(code: str, service: Annotated[ShortLinkService, Depends(get_service)]) -> dict[str, str | None]:
    """Look up a short link without following it

    HTTP responses:
        200: {"short_code": "<code>", "url": "<target>", "expires_at": "<ISO 8601 UTC>" | null}
        401: wrong api key
        404: no live link for the code
    """
    link = service.describe(code)
    return {
        'short_code': link.code,
        'url': link.target,
        'expires_at': None if link.expires_at is None else link.expires_at.isoformat(timespec='seconds'),
    }


@router.delete('/api/shorten/{code}', status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_api_key)])
def delete(code: str, service: Annotated[ShortLinkService, Depends(get_service)]) -> Response:
    service.remove(code)
    logger.info('Short link deleted. Responding with 204.', extra={'event': SHORT_LINK_DELETED, 'code': code})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get('/{code}')
def redirect(code: str, service: Annotated[ShortLinkService, Depends(get_service)]) -> RedirectResponse:
    target = service.resolve(code)
    logger.info('Redirecting client to target URL. Responding with 307.', extra={'event': SHORT_LINK_REDIRECTED, 'code': code})
    return RedirectResponse(url=target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
