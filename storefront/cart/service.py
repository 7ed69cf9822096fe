"""Cart manager: stock-checked mutations committed to persistent storage."""
from typing import Optional

from storefront.config import Settings, get_settings
from storefront.db import create_store
from storefront.errors import (
    CollaboratorError,
    StorageError,
    ERROR_OUT_OF_STOCK,
    ERROR_ADD_PRODUCT,
    ERROR_REMOVE_PRODUCT,
    ERROR_UPDATE_AMOUNT,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.api import StorefrontAPI
from storefront.services.money import to_json_number
from storefront.services.notifications import NotificationService
from .models import Cart, CartItem, CartOutcome, CartResult
from .storage import CartStorage

logger = get_logger(__name__)


class CartManager:
    """
    Owns the shopper's cart.

    Features:
    - Stock check against the collaborator before every add/update
    - Next state built on a copy and swapped in only after it is persisted
    - One shopper-facing notification per failed operation
    """

    def __init__(
        self,
        api: StorefrontAPI,
        storage: CartStorage,
        notifier: NotificationService,
        cart: Optional[Cart] = None,
    ):
        self.api = api
        self.storage = storage
        self.notifier = notifier
        self._cart = cart if cart is not None else Cart()

    @classmethod
    async def load(
        cls,
        api: StorefrontAPI,
        storage: CartStorage,
        notifier: NotificationService,
    ) -> "CartManager":
        """Restore the cart from storage and build a manager around it."""
        cart = await storage.load()
        logger.info(f"Cart restored with {len(cart)} item(s)")
        return cls(api, storage, notifier, cart)

    async def __aenter__(self) -> "CartManager":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the collaborator client."""
        await self.api.aclose()

    @property
    def cart(self) -> Cart:
        """Copy of the current cart."""
        return self._cart.copy()

    async def _commit(self, next_cart: Cart) -> None:
        # Persist first so a failed write leaves the current cart untouched
        await self.storage.save(next_cart)
        self._cart = next_cart

    def _success(self, outcome: CartOutcome = CartOutcome.SUCCESS) -> CartResult:
        return CartResult(outcome=outcome, cart=self.cart)

    def _fail(self, outcome: CartOutcome, message: str) -> CartResult:
        self.notifier.error(message)
        return CartResult(outcome=outcome, cart=self.cart, message=message)

    async def add_product(self, product_id: int) -> CartResult:
        """Add one unit of a product, fetching its data when it is new to the cart."""
        pid = sanitize_id_for_logging(product_id)
        try:
            stock = await self.api.get_stock(product_id)

            next_cart = self._cart.copy()
            existing = next_cart.find(product_id)
            desired = (existing.amount if existing else 0) + 1

            if desired > stock.amount:
                logger.info(f"Add {pid} refused: wants {desired}, stock {stock.amount}")
                return self._fail(CartOutcome.STOCK_EXCEEDED, ERROR_OUT_OF_STOCK)

            if existing:
                existing.amount = desired
            else:
                product = await self.api.get_product(product_id)
                next_cart.items.append(
                    CartItem(
                        id=product_id,
                        name=product.name,
                        price=product.price,
                        image_url=product.image_url,
                        amount=1,
                        extra=product.extra_fields(),
                    )
                )

            await self._commit(next_cart)
        except (CollaboratorError, StorageError) as e:
            logger.warning(f"Add {pid} failed: {e}")
            return self._fail(CartOutcome.COLLABORATOR_FAILURE, ERROR_ADD_PRODUCT)

        return self._success()

    async def remove_product(self, product_id: int) -> CartResult:
        """Drop a product's line item. No remote lookups."""
        pid = sanitize_id_for_logging(product_id)
        next_cart = self._cart.copy()
        item = next_cart.find(product_id)

        if item is None:
            logger.info(f"Remove {pid} refused: not in cart")
            return self._fail(CartOutcome.NOT_FOUND, ERROR_REMOVE_PRODUCT)

        next_cart.items.remove(item)
        try:
            await self._commit(next_cart)
        except StorageError as e:
            logger.warning(f"Remove {pid} failed: {e}")
            return self._fail(CartOutcome.COLLABORATOR_FAILURE, ERROR_REMOVE_PRODUCT)

        return self._success()

    async def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        """Set a product's amount. Non-positive amounts are ignored."""
        if amount <= 0:
            return self._success(CartOutcome.IGNORED)

        pid = sanitize_id_for_logging(product_id)
        try:
            stock = await self.api.get_stock(product_id)

            if amount > stock.amount:
                logger.info(f"Update {pid} refused: wants {amount}, stock {stock.amount}")
                return self._fail(CartOutcome.STOCK_EXCEEDED, ERROR_OUT_OF_STOCK)

            next_cart = self._cart.copy()
            item = next_cart.find(product_id)
            if item is None:
                logger.info(f"Update {pid} refused: not in cart")
                return self._fail(CartOutcome.NOT_FOUND, ERROR_UPDATE_AMOUNT)

            item.amount = amount
            await self._commit(next_cart)
        except (CollaboratorError, StorageError) as e:
            logger.warning(f"Update {pid} failed: {e}")
            return self._fail(CartOutcome.COLLABORATOR_FAILURE, ERROR_UPDATE_AMOUNT)

        return self._success()

    async def clear(self) -> CartResult:
        """Empty the cart, e.g. after checkout."""
        try:
            await self._commit(Cart())
        except StorageError as e:
            logger.error(f"Failed to clear cart: {e}")
            return CartResult(outcome=CartOutcome.COLLABORATOR_FAILURE, cart=self.cart)
        return self._success()

    def get_cart_summary(self) -> dict:
        """Plain view of the cart with totals."""
        cart = self._cart
        return {
            "is_empty": cart.is_empty,
            "total_items": cart.total_items,
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "amount": item.amount,
                    "price": to_json_number(item.price),
                    "subtotal": to_json_number(item.total_price),
                }
                for item in cart.items
            ],
            "total": to_json_number(cart.subtotal),
        }


async def create_cart_manager(
    settings: Optional[Settings] = None,
    notifier: Optional[NotificationService] = None,
) -> CartManager:
    """
    Wire API client, storage and notifier from settings and restore the cart.

    Use the result as ``async with await create_cart_manager() as manager:``
    so the HTTP client is closed.
    """
    settings = settings or get_settings()
    storage = CartStorage(create_store(settings), settings.cart_storage_key)
    api = StorefrontAPI.from_settings(settings)
    try:
        return await CartManager.load(api, storage, notifier or NotificationService())
    except Exception:
        await api.aclose()
        raise
