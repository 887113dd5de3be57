"""Utility functions for application configuration management.

Configuration is read from environment variables. A `.env` file in the
working directory is loaded into the environment at process start (see
`localshortener.__main__`), and an optional YAML file pointed to by
`CONFIG_PATH` provides defaults underneath the environment:

    redis:
      path: data/localshortener.rdb   # embedded store (redislite)
      host: null                      # set to use a standalone Redis server
      port: 6379
      db: 0
    shortener:
      code_length: 6
      collision_retries: 0
    api:
      host: 0.0.0.0
      port: 8000

Environment variables always win over the YAML file. The shared API key is
only ever read from the environment.

The returned configuration follows the same structure, plus the API key and
the DAO key prefix:

    {
        "redis": {"path": ..., "host": ..., "port": ..., "db": ..., "username": ..., "password": ...},
        "shortener": {"code_length": 6, "collision_retries": 0},
        "api": {"key": ..., "host": ..., "port": ...},
        "prefix": "localshortener:local" | None,
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    short_code_length(value) -> int
        Parse the configured short code length, falling back to 6.

    load_config() -> dict
        Load the full application configuration.

Example:
    >>> from localshortener.utils.config import load_config
    >>> config = load_config()
    >>> config['shortener']['code_length']
    6
"""

import os
import logging
from pathlib import Path
from typing import Any

import yaml

from localshortener.types import AppConfiguration
from localshortener.constants import ENV, Defaults
from localshortener.exceptions import BadConfigurationError
from localshortener.utils.helpers import require_environment


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'localshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'localshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def short_code_length(value: Any) -> int:
    """Parse the configured short code length

    Missing, non-numeric or non-positive values fall back to the default
    length of 6 with a warning, so a bad value never prevents startup.

    Example:
        >>> short_code_length('8')
        8
        >>> short_code_length('eight')
        6
    """
    if value is None or value == '':
        return Defaults.SHORT_CODE_LENGTH

    try:
        length = int(value)
    except (TypeError, ValueError):
        length = 0

    if length < 1:
        logger.warning(
            'Error parsing %s, defaulting to %s.',
            ENV.Shortener.SHORT_CODE_LENGTH,
            Defaults.SHORT_CODE_LENGTH,
            extra={'value': value},
        )
        return Defaults.SHORT_CODE_LENGTH
    return length


def _int_setting(name: str, value: Any, minimum: int = 0) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'{name} must be an integer (given value: {value!r}).') from e
    if number < minimum:
        raise BadConfigurationError(f'{name} must be at least {minimum} (given value: {number}).')
    return number


def _load_config_file() -> dict[str, Any]:
    path = os.environ.get(ENV.App.CONFIG_PATH)
    if not path:
        return {}

    try:
        with Path(path).open(encoding='utf-8') as f:
            document = yaml.safe_load(f) or {}
    except OSError as e:
        raise BadConfigurationError(f"Can't read configuration file {path}.") from e
    except yaml.YAMLError as e:
        raise BadConfigurationError(f'Configuration file {path} is not valid YAML.') from e

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration file {path} must contain a mapping.')
    logger.debug('Loaded configuration file.', extra={'configPath': path})
    return document


@require_environment(ENV.Api.API_KEY)
def load_config() -> AppConfiguration:
    """Load the application configuration

    Environment variables required:
        API_KEY: shared secret expected in the X-API-KEY header of mutating requests

    Returns:
        dict: Application configuration (see module docstring).

    Raises:
        MissingEnvironmentVariableError:
            If API_KEY is not set.
        BadConfigurationError:
            If a port, database index or retry count is invalid, or the
            configuration file can't be read.

    Example:
        >>> app_config = load_config()
        >>> app_config['redis']['path']
        'data/localshortener.rdb'
    """
    document = _load_config_file()

    def lookup(env_name: str, section: str, key: str, default: Any = None) -> Any:
        if env_name in os.environ:
            return os.environ[env_name]
        return document.get(section, {}).get(key, default)

    redis_config = {
        'path': lookup(ENV.Store.PATH, 'redis', 'path', Defaults.STORE_PATH),
        'host': lookup(ENV.Store.HOST, 'redis', 'host') or None,
        'port': _int_setting(ENV.Store.PORT, lookup(ENV.Store.PORT, 'redis', 'port', 6379), minimum=1),
        'db': _int_setting(ENV.Store.DB, lookup(ENV.Store.DB, 'redis', 'db', 0)),
        'username': lookup(ENV.Store.USERNAME, 'redis', 'username') or None,
        'password': lookup(ENV.Store.PASSWORD, 'redis', 'password') or None,
    }
    shortener_config = {
        'code_length': short_code_length(lookup(ENV.Shortener.SHORT_CODE_LENGTH, 'shortener', 'code_length')),
        'collision_retries': _int_setting(
            ENV.Shortener.COLLISION_RETRIES,
            lookup(ENV.Shortener.COLLISION_RETRIES, 'shortener', 'collision_retries', Defaults.COLLISION_RETRIES),
        ),
    }
    api_config = {
        'key': os.environ[ENV.Api.API_KEY],
        'host': lookup(ENV.Api.HOST, 'api', 'host', Defaults.HOST),
        'port': _int_setting(ENV.Api.PORT, lookup(ENV.Api.PORT, 'api', 'port', Defaults.PORT), minimum=1),
    }

    logger.debug(
        'Loaded application configuration.',
        extra={
            'appEnv': app_env(),
            'store': redis_config['host'] or redis_config['path'],
            'codeLength': shortener_config['code_length'],
        },
    )
    return {
        'redis': redis_config,
        'shortener': shortener_config,
        'api': api_config,
        'prefix': app_prefix(),
    }
