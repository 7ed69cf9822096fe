"""Cart models with Decimal-based pricing."""
import copy
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, List

from storefront.services.money import to_decimal, parse_decimal, round_money, multiply, to_json_number

# Wire names of the modelled fields; anything else lands in CartItem.extra
_ITEM_FIELDS = ("id", "name", "price", "imageUrl", "amount")


@dataclass
class CartItem:
    """One product in the cart with its requested quantity."""
    id: int
    name: str
    price: Decimal
    image_url: str = ""
    amount: int = 1
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.price = to_decimal(self.price)
        if not isinstance(self.amount, int) or self.amount < 1:
            raise ValueError("amount must be a positive integer")

    @property
    def total_price(self) -> Decimal:
        """Price for all units of this item."""
        return round_money(multiply(self.price, self.amount))

    def to_dict(self) -> dict:
        """Convert to the stored JSON shape."""
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "price": to_json_number(self.price),
            "imageUrl": self.image_url,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from the stored JSON shape."""
        return cls(
            id=int(data["id"]),
            name=data["name"],
            price=parse_decimal(data["price"]),
            image_url=data.get("imageUrl", ""),
            amount=int(data["amount"]),
            extra={k: v for k, v in data.items() if k not in _ITEM_FIELDS},
        )


@dataclass
class Cart:
    """Ordered sequence of line items, at most one per product id."""
    items: List[CartItem] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for item in self.items:
            if item.id in seen:
                raise ValueError(f"Duplicate cart item for product {item.id}")
            seen.add(item.id)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.amount for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        """Sum of all line totals."""
        return round_money(sum((item.total_price for item in self.items), Decimal("0")))

    def find(self, product_id: int) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == product_id), None)

    def copy(self) -> "Cart":
        """Independent copy; mutating it never touches this cart."""
        return Cart(items=copy.deepcopy(self.items))

    def to_list(self) -> list[dict]:
        """Convert to the stored JSON array."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """Create from the stored JSON array."""
        if not isinstance(data, list):
            raise TypeError(f"Cart snapshot must be a list, got {type(data).__name__}")
        return cls(items=[CartItem.from_dict(item) for item in data])


class CartOutcome(str, Enum):
    """How a cart operation ended."""
    SUCCESS = "success"
    IGNORED = "ignored"
    STOCK_EXCEEDED = "stock_exceeded"
    NOT_FOUND = "not_found"
    COLLABORATOR_FAILURE = "collaborator_failure"


@dataclass(frozen=True)
class CartResult:
    """Outcome of an operation plus the cart as it stands afterwards."""
    outcome: CartOutcome
    cart: Cart
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome in (CartOutcome.SUCCESS, CartOutcome.IGNORED)
