from shorty.dao.base.store_base_dao import StoreBaseDAO


__all__ = ['StoreBaseDAO']
