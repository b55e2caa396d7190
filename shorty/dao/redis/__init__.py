from shorty.dao.redis.mixins import RedisClientMixin
from shorty.dao.redis.store_redis_dao import StoreRedisDAO


__all__ = [
    'RedisClientMixin',
    'StoreRedisDAO',
]
