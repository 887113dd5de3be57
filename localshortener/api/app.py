"""FastAPI application factory

The store adapter is created once per application in the lifespan handler,
kept on `app.state` and handed to endpoints through dependencies. uvicorn
stops accepting connections and drains in-flight requests before running the
lifespan shutdown, so the store is only closed once no transaction is running.

Example:
    >>> from localshortener.utils import load_config
    >>> from localshortener.api import create_app
    >>> app = create_app(load_config())
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from localshortener import __version__
from localshortener.api.errors import register_exception_handlers
from localshortener.api.routes import router
from localshortener.dao.base import KeyValueBaseDAO
from localshortener.dao.redis import KeyValueRedisDAO
from localshortener.services import ShortLinkService
from localshortener.types import AppConfiguration


logger = logging.getLogger(__name__)


def create_app(config: AppConfiguration, dao: KeyValueBaseDAO | None = None) -> FastAPI:
    """Create the HTTP application

    Args:
        config (AppConfiguration):
            Application configuration as returned by load_config().
        dao (KeyValueBaseDAO | None):
            Pre-built store adapter. If None, a KeyValueRedisDAO is created from
            config['redis'] on startup. Either way the app closes it on shutdown.

    Returns:
        FastAPI: the application, ready to be served by uvicorn.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store = dao
        if store is None:
            redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
            store = KeyValueRedisDAO(**redis_config, prefix=config.get('prefix'))

        app.state.dao = store
        app.state.api_key = config['api']['key']
        app.state.service = ShortLinkService(
            store,
            code_length=config['shortener']['code_length'],
            collision_retries=config['shortener']['collision_retries'],
        )
        logger.info('Application started.', extra={'codeLength': config['shortener']['code_length']})
        try:
            yield
        finally:
            store.close()
            logger.info('Application stopped.')

    app = FastAPI(title='localshortener', version=__version__, lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(router)
    return app
