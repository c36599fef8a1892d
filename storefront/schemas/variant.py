# storefront/schemas/variant.py
from typing import List, Optional

from pydantic import BaseModel, Field


class VariantSelectionIn(BaseModel):
    """A guided (brand/model/logo/coverage) or flat (option) selection."""
    brand: Optional[str] = None
    model: Optional[str] = None
    logo_option: Optional[str] = None
    coverage_option: Optional[str] = None
    option: Optional[str] = Field(None, description="Flat choice for non device-skin products")


class AddToCartIn(VariantSelectionIn):
    quantity: int = Field(1, description="Clamped to 1..99")


class VariantOut(BaseModel):
    variant: str


class VariantOptionsOut(BaseModel):
    logo_options: List[str]
    coverage_options: List[str]
