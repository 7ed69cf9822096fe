"""Tests for the storefront API client"""
import httpx
import pytest
from decimal import Decimal

from storefront.errors import CollaboratorError
from storefront.services.api import StorefrontAPI

BASE_URL = "http://storefront.test"


def make_api(handler):
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return StorefrontAPI(BASE_URL, client=client)


def catalog_handler(request: httpx.Request) -> httpx.Response:
    routes = {
        "/stock/1": {"id": 1, "amount": 3},
        "/products/1": {
            "id": 1,
            "title": "Tênis de Caminhada Leve Confortável",
            "price": 179.9,
            "image": "https://images.test/tenis-1.jpg",
            "amount": 40,
            "brand": "Rocket",
        },
        "/stock/2": {"amount": "lots"},
        "/products/2": {"id": 2},
    }
    if request.url.path == "/stock/3":
        return httpx.Response(200, content=b"<html>oops</html>")
    if request.url.path in routes:
        return httpx.Response(200, json=routes[request.url.path])
    return httpx.Response(404, json={})


@pytest.mark.asyncio
async def test_get_stock():
    async with make_api(catalog_handler) as api:
        stock = await api.get_stock(1)

    assert stock.amount == 3


@pytest.mark.asyncio
async def test_get_product_accepts_legacy_field_names():
    async with make_api(catalog_handler) as api:
        product = await api.get_product(1)

    assert product.id == 1
    assert product.name == "Tênis de Caminhada Leve Confortável"
    assert product.price == Decimal("179.9")
    assert product.image_url == "https://images.test/tenis-1.jpg"
    # amount from the catalog is never carried into the cart
    assert product.extra_fields() == {"brand": "Rocket"}


@pytest.mark.asyncio
@pytest.mark.parametrize("call,product_id", [
    ("get_stock", 404),
    ("get_product", 404),
    ("get_stock", 2),
    ("get_product", 2),
    ("get_stock", 3),
])
async def test_failures_raise_collaborator_error(call, product_id):
    """Missing product, bad payload and non-JSON body all surface the same way."""
    async with make_api(catalog_handler) as api:
        with pytest.raises(CollaboratorError):
            await getattr(api, call)(product_id)


@pytest.mark.asyncio
async def test_transport_error_raises_collaborator_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_api(handler) as api:
        with pytest.raises(CollaboratorError):
            await api.get_stock(1)


@pytest.mark.asyncio
async def test_timeout_raises_collaborator_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    async with make_api(handler) as api:
        with pytest.raises(CollaboratorError, match="Timeout"):
            await api.get_stock(1)


@pytest.mark.asyncio
@pytest.mark.parametrize("price", [None, "abc", [1], {"value": 10}, True, "NaN", "Infinity"])
async def test_bad_price_raises_collaborator_error(price):
    """A product without a usable price is rejected, never priced at zero."""
    def handler(request):
        return httpx.Response(200, json={"id": 5, "name": "Tênis", "price": price})

    async with make_api(handler) as api:
        with pytest.raises(CollaboratorError):
            await api.get_product(5)


@pytest.mark.asyncio
@pytest.mark.parametrize("price,expected", [
    (179.9, Decimal("179.9")),
    ("219.90", Decimal("219.90")),
    (100, Decimal("100")),
])
async def test_price_parsing(price, expected):
    def handler(request):
        return httpx.Response(200, json={"id": 5, "name": "Tênis", "price": price})

    async with make_api(handler) as api:
        product = await api.get_product(5)

    assert product.price == expected
