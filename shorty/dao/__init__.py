from shorty.dao.key_schema import KeySchema
from shorty.dao.base import StoreBaseDAO


__all__ = [
    'KeySchema',
    'StoreBaseDAO',
]
