"""
# `storefront/schemas/product.py` — Product Schema

## Overview
Catalog records as the REST layer returns them (`GET /api/products/:id`,
`GET /api/products/slug/:slug`). The same model is stored verbatim in the
wishlist snapshot, so unknown fields are kept.

| Field        | Wire name     | Type              | Notes |
|--------------|---------------|-------------------|-------|
| id           | `_id`         | `str`             | Document id, wishlist identity |
| title        | `title`       | `str`             | Display name |
| slug         | `slug`        | `str`             | URL slug |
| price        | `price`       | `float`           | Unit price |
| old_price    | `oldPrice`    | `float` / `null`  | Strike-through price |
| images       | `images`      | `list[str]`       | First image is the cart thumbnail |
| category_id  | `categoryId`  | `str` / `object`  | Populated or raw id |
| variants     | `variants`    | `ProductVariants` | `mobileModel` or `clothingSize` |
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

VariantType = Literal["mobileModel", "clothingSize"]
StockStatus = Literal["In Stock", "Out of Stock"]


class CategoryRef(BaseModel):
    """Category embedded by the catalog when it populates `categoryId`."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id")
    name: str = ""
    image_url: Optional[str] = Field(None, alias="imageUrl")


class ProductVariants(BaseModel):
    type: VariantType = Field("clothingSize", description="Kind of variant picker the product uses")
    options: List[str] = Field(default_factory=list, description="Flat option list (or brand list for skins)")


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id", description="Product document id")
    title: str = Field(..., description="Product title")
    slug: str = Field("", description="URL slug")
    description: str = Field("", description="Long description")
    price: float = Field(0.0, description="Unit price")
    old_price: Optional[float] = Field(None, alias="oldPrice")
    images: List[str] = Field(default_factory=list)
    category_id: Optional[Union[str, CategoryRef]] = Field(None, alias="categoryId")
    parent_page: str = Field("", alias="parentPage")
    tags: List[str] = Field(default_factory=list)
    stock_status: StockStatus = Field("In Stock", alias="stockStatus")
    is_active: bool = Field(True, alias="isActive")
    variants: ProductVariants = Field(default_factory=ProductVariants)
    reviews: List[str] = Field(default_factory=list)
    created_at: Optional[str] = Field(None, alias="createdAt")

    @property
    def main_image(self) -> str:
        return self.images[0] if self.images else ""

    @property
    def is_device_skin(self) -> bool:
        return self.variants.type == "mobileModel"

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready dict using the catalog's wire names."""
        return self.model_dump(by_alias=True, mode="json")
