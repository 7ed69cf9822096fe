"""Collaborator Models - Pydantic models for stock and product payloads."""
from decimal import Decimal
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from storefront.services.money import parse_decimal


class Stock(BaseModel):
    """Stock record: how many units of a product can be bought."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    amount: int


class Product(BaseModel):
    """Product as returned by the catalog endpoint."""
    model_config = ConfigDict(extra="allow")

    id: int
    # Older catalog payloads use title/image
    name: str = Field(validation_alias=AliasChoices("name", "title"))
    price: Decimal
    image_url: str = Field(default="", validation_alias=AliasChoices("imageUrl", "image_url", "image"))

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v):
        return parse_decimal(v)

    def extra_fields(self) -> dict[str, Any]:
        """Fields the catalog sent that the cart does not model, minus any amount."""
        extra = dict(self.model_extra or {})
        extra.pop("amount", None)
        return extra
