from purchases.stores.interfaces import PurchaseStore

__all__ = ["PurchaseStore"]
