"""Cart package: models, storage, and manager."""
from .models import CartItem, Cart, CartOutcome, CartResult
from .storage import CartStorage
from .service import CartManager, create_cart_manager

__all__ = [
    "CartItem",
    "Cart",
    "CartOutcome",
    "CartResult",
    "CartStorage",
    "CartManager",
    "create_cart_manager",
]
