"""Pytest configuration and fixtures"""
import os
import pytest
from decimal import Decimal
from unittest.mock import Mock, AsyncMock

# Keep tests independent of any real deployment
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("STOREFRONT_API_URL", "http://storefront.test")

from storefront.cart import Cart, CartItem, CartManager, CartStorage
from storefront.db import MemoryStore
from storefront.errors import CollaboratorError
from storefront.services.api import StorefrontAPI
from storefront.services.models import Product, Stock

CART_KEY = "@RocketShoes:cart"


@pytest.fixture
def sample_product():
    """Sample catalog payload"""
    return {
        "id": 1,
        "name": "Tênis de Caminhada Leve Confortável",
        "price": 179.9,
        "imageUrl": "https://images.test/tenis-1.jpg",
    }


@pytest.fixture
def catalog(sample_product):
    """Products and stock known to the fake collaborator"""
    return {
        "products": {
            1: sample_product,
            2: {"id": 2, "name": "Tênis VR Caminhada", "price": 139.9, "imageUrl": "https://images.test/tenis-2.jpg"},
            3: {"id": 3, "name": "Tênis Adidas Duramo", "price": 219.9, "imageUrl": "https://images.test/tenis-3.jpg"},
        },
        "stock": {1: 3, 2: 5, 3: 2},
    }


@pytest.fixture
def mock_api(catalog):
    """Mock storefront API backed by the catalog fixture"""
    api = Mock()

    async def get_stock(product_id):
        if product_id not in catalog["stock"]:
            raise CollaboratorError(f"stock/{product_id} returned HTTP 404")
        return Stock(id=product_id, amount=catalog["stock"][product_id])

    async def get_product(product_id):
        if product_id not in catalog["products"]:
            raise CollaboratorError(f"products/{product_id} returned HTTP 404")
        return StorefrontAPI._parse(Product, catalog["products"][product_id], f"products/{product_id}")

    api.get_stock = AsyncMock(side_effect=get_stock)
    api.get_product = AsyncMock(side_effect=get_product)
    return api


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def storage(store):
    return CartStorage(store, CART_KEY)


@pytest.fixture
def notifier():
    """Notifier mock recording error messages"""
    return Mock()


@pytest.fixture
def make_manager(mock_api, storage, notifier):
    """Build a manager around an initial cart"""
    def _make(items=None):
        return CartManager(mock_api, storage, notifier, Cart(items=list(items or [])))
    return _make


@pytest.fixture
def sneaker_item():
    return CartItem(
        id=1,
        name="Tênis de Caminhada Leve Confortável",
        price=Decimal("179.9"),
        image_url="https://images.test/tenis-1.jpg",
        amount=2,
    )
