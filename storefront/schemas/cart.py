"""
storefront/schemas/cart.py - Pydantic models for cart lines.

Lines are persisted under the `cart` key with camelCase wire names
(`productId`, `deviceModel`) so a snapshot written by the browser build
loads unchanged.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CartItem(BaseModel):
    """What a caller hands to `CartStore.add_item` (no id yet)."""
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", description="ID of the product")
    name: str = Field(..., description="Name of the product at the time of adding to cart")
    price: float = Field(..., description="Price per unit at the time of adding to cart")
    quantity: int = Field(1, description="Quantity to add")
    image: str = Field("", description="Display image at the time of adding to cart")
    variant: str = Field(..., description="Composite or flat variant descriptor")
    device_model: Optional[str] = Field(None, alias="deviceModel")


class CartLine(CartItem):
    id: str = Field(..., description="Synthetic line id")


class AddItemBody(BaseModel):
    """HTTP body for `POST /cart/items`."""
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    quantity: int = Field(1, ge=1, le=10000, description="Quantity (>=1).")
    image: str = ""
    variant: str = Field(..., description="Variant string; must not be empty")
    device_model: Optional[str] = Field(None, alias="deviceModel")

    @field_validator("product_id", "variant")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = (v or "").strip()
        for ch in ("\u200b", "\u200c", "\u200d", "\ufeff", "\xa0"):
            v = v.replace(ch, "")
        if not v:
            raise ValueError("value cannot be empty")
        return v

    def to_item(self) -> CartItem:
        return CartItem(**self.model_dump())


class QuantityBody(BaseModel):
    quantity: int = Field(..., description="New quantity; 0 or below removes the line")


class CartOut(BaseModel):
    items: List[CartLine] = Field(default_factory=list)
    total_items: int = 0
    total_price: float = 0.0
