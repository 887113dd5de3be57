from localshortener.dao.base.key_value_base_dao import KeyValueBaseDAO


__all__ = [
    'KeyValueBaseDAO',
]
