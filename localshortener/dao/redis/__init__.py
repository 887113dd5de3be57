from localshortener.dao.redis.redis_key_schema import RedisKeySchema
from localshortener.dao.redis.mixins import RedisClientMixin
from localshortener.dao.redis.key_value_redis_dao import KeyValueRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'KeyValueRedisDAO',
]
