import hmac
from typing import Annotated

from fastapi import Header, Request

from localshortener.constants import API_KEY_HEADER
from localshortener.dao.base import KeyValueBaseDAO
from localshortener.exceptions import AuthenticationError
from localshortener.services import ShortLinkService


def get_service(request: Request) -> ShortLinkService:
    return request.app.state.service


def get_dao(request: Request) -> KeyValueBaseDAO:
    return request.app.state.dao


def require_api_key(
    request: Request,
    api_key: Annotated[str | None, Header(alias=API_KEY_HEADER)] = None,
) -> None:
    """Reject requests whose X-API-KEY header doesn't match the configured key

    Raises:
        AuthenticationError:
            If the header is missing or wrong.
    """
    expected = request.app.state.api_key
    if api_key is None or not hmac.compare_digest(api_key.encode('utf-8'), expected.encode('utf-8')):
        raise AuthenticationError('wrong api key')
