"""
# `storefront/routers/variants.py` — Device-skin variant catalog

| Method | Path                               | Behaviour |
|--------|------------------------------------|-----------|
| GET    | `/variants/brands`                 | Known device brands |
| GET    | `/variants/brands/{brand}/models`  | Models for a brand (404 if unknown) |
| GET    | `/variants/options`                | Logo and coverage option lists |
| POST   | `/variants/compose`                | Run a selection through the composer; 400 if invalid or incomplete |
"""
from typing import List

from fastapi import APIRouter, HTTPException

from storefront.schemas.variant import VariantOptionsOut, VariantOut, VariantSelectionIn
from storefront.services.variant_composer import (
    COVERAGE_OPTIONS,
    LOGO_OPTIONS,
    MOBILE_BRANDS,
    InvalidVariantChoice,
    VariantComposer,
    VariantSelectionError,
    require_variant,
)

router = APIRouter(prefix="/variants", tags=["Variants"])


@router.get("/brands", response_model=List[str])
def list_brands():
    return list(MOBILE_BRANDS)


@router.get("/brands/{brand}/models", response_model=List[str])
def list_models(brand: str):
    if brand not in MOBILE_BRANDS:
        raise HTTPException(status_code=404, detail="Brand not found")
    return MOBILE_BRANDS[brand]


@router.get("/options", response_model=VariantOptionsOut)
def list_options():
    return VariantOptionsOut(logo_options=list(LOGO_OPTIONS), coverage_options=list(COVERAGE_OPTIONS))


@router.post("/compose", response_model=VariantOut)
def compose(payload: VariantSelectionIn):
    composer = VariantComposer()
    try:
        if payload.brand:
            composer.choose_brand(payload.brand)
        if payload.model:
            composer.choose_model(payload.model)
        if payload.logo_option:
            composer.choose_logo_option(payload.logo_option)
        if payload.coverage_option:
            composer.choose_coverage_option(payload.coverage_option)
        return VariantOut(variant=require_variant(composer))
    except (InvalidVariantChoice, VariantSelectionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
