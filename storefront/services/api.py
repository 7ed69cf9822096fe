"""
Storefront API Client

Read-only access to the two collaborator endpoints the cart depends on:
- GET stock/{product_id}    -> {"amount": int}
- GET products/{product_id} -> product fields

Every failure (transport error, non-2xx status, payload that does not
validate) is raised as CollaboratorError so callers handle one type.
"""

from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from storefront.config import Settings
from storefront.errors import CollaboratorError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.models import Product, Stock

logger = get_logger(__name__)


class StorefrontAPI:
    """Async client for the stock and product endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorefrontAPI":
        return cls(settings.api_url, timeout=settings.api_timeout)

    async def __aenter__(self) -> "StorefrontAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str) -> Any:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise CollaboratorError(f"Timeout requesting {path}") from e
        except httpx.HTTPStatusError as e:
            raise CollaboratorError(
                f"{path} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise CollaboratorError(f"Request to {path} failed: {e}") from e
        except ValueError as e:
            # response.json() on a non-JSON body
            raise CollaboratorError(f"{path} returned invalid JSON") from e

    @staticmethod
    def _parse(model: type[BaseModel], data: Any, path: str):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise CollaboratorError(
                f"{path} returned an unexpected payload: {e.error_count()} error(s)"
            ) from e

    async def get_stock(self, product_id: int) -> Stock:
        """Fetch the purchasable amount for a product. Never cached."""
        path = f"stock/{product_id}"
        stock = self._parse(Stock, await self._get_json(path), path)
        logger.debug(f"Stock for {sanitize_id_for_logging(product_id)}: {stock.amount}")
        return stock

    async def get_product(self, product_id: int) -> Product:
        """Fetch catalog data for a product."""
        path = f"products/{product_id}"
        return self._parse(Product, await self._get_json(path), path)
