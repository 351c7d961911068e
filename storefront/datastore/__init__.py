from storefront.datastore.engine import SqlStateStore
from storefront.datastore.state import (
    CART_ID_KEY,
    CHECKOUT_URL_KEY,
    CUSTOMER_TOKEN_KEY,
    MemoryStateStore,
    StateStore,
)

__all__ = [
    "SqlStateStore",
    "MemoryStateStore",
    "StateStore",
    "CART_ID_KEY",
    "CHECKOUT_URL_KEY",
    "CUSTOMER_TOKEN_KEY",
]
