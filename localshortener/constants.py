from enum import StrEnum


class TTL:
    """TTL durations in seconds and the largest accepted expiry in minutes."""

    ONE_MINUTE = 60

    # Redis keeps absolute expiry times as signed 64-bit milliseconds. Half of
    # that range is left for the current timestamp.
    MAX_MINUTES = 2**62 // (ONE_MINUTE * 1000)


class Defaults:
    """Default configuration values."""

    SHORT_CODE_LENGTH = 6
    COLLISION_RETRIES = 0
    STORE_PATH = 'data/localshortener.rdb'
    HOST = '0.0.0.0'  # noqa: S104
    PORT = 8000


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'
        CONFIG_PATH = 'CONFIG_PATH'

    class Api(StrEnum):
        API_KEY = 'API_KEY'
        HOST = 'HOST'
        PORT = 'PORT'

    class Shortener(StrEnum):
        SHORT_CODE_LENGTH = 'SHORT_CODE_LENGTH'
        COLLISION_RETRIES = 'COLLISION_RETRIES'

    class Store(StrEnum):
        # Embedded store (redislite) RDB file
        PATH = 'STORE_PATH'
        # Standalone Redis server (takes precedence over the embedded store when set)
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


# Shared-secret header for mutating endpoints
API_KEY_HEADER = 'X-API-KEY'

# Log event codes
SHORT_LINK_CREATED = 'SHORT_LINK_CREATED'
SHORT_LINK_REDIRECTED = 'SHORT_LINK_REDIRECTED'
SHORT_LINK_DELETED = 'SHORT_LINK_DELETED'
SHORT_LINK_NOT_FOUND = 'SHORT_LINK_NOT_FOUND'
INVALID_REQUEST = 'INVALID_REQUEST'
WRONG_API_KEY = 'WRONG_API_KEY'
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
