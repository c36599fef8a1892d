"""
# `storefront/services/variant_composer.py` — Variant selection

## Device skins (`mobileModel`)
Four steps, strictly in order:

| Step | Field             | Domain |
|------|-------------------|--------|
| 1    | `brand`           | keys of `MOBILE_BRANDS` |
| 2    | `model`           | `MOBILE_BRANDS[brand]` |
| 3    | `logo_option`     | `LOGO_OPTIONS` |
| 4    | `coverage_option` | `COVERAGE_OPTIONS` |

Choosing a step clears every later step. `on_change` is called with the
composite `"{model} - {coverage} - {logo}"` only when step 4 is set; it is
never called with a partial selection.

## Everything else (`clothingSize`, colours, chips)
One flat choice from the product's option list; the option is the variant.
"""
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Union

from storefront.schemas.product import Product

logger = logging.getLogger("storefront.variants")

MOBILE_BRANDS: Dict[str, List[str]] = {
    "Apple iPhone": [
        "iPhone 15 Pro Max", "iPhone 15 Pro", "iPhone 15 Plus", "iPhone 15",
        "iPhone 14 Pro Max", "iPhone 14 Pro", "iPhone 14 Plus", "iPhone 14",
        "iPhone 13 Pro Max", "iPhone 13 Pro", "iPhone 13", "iPhone 13 Mini",
        "iPhone 12 Pro Max", "iPhone 12 Pro", "iPhone 12", "iPhone 12 Mini",
        "iPhone 11 Pro Max", "iPhone 11 Pro", "iPhone 11",
    ],
    "Samsung": [
        "Galaxy S23 Ultra", "Galaxy S23+", "Galaxy S23",
        "Galaxy S22 Ultra", "Galaxy S22+", "Galaxy S22",
        "Galaxy S21 Ultra", "Galaxy S21+", "Galaxy S21",
        "Galaxy Note 20 Ultra", "Galaxy Note 20",
        "Galaxy A54", "Galaxy A53", "Galaxy A52",
    ],
    "OnePlus": [
        "OnePlus 11", "OnePlus 10 Pro", "OnePlus 10T",
        "OnePlus 9 Pro", "OnePlus 9", "OnePlus 9R",
        "OnePlus 8 Pro", "OnePlus 8", "OnePlus 8T",
        "OnePlus Nord 3", "OnePlus Nord 2", "OnePlus Nord",
    ],
    "Xiaomi": [
        "Redmi Note 12 Pro+", "Redmi Note 12 Pro", "Redmi Note 12",
        "Redmi Note 11 Pro+", "Redmi Note 11 Pro", "Redmi Note 11",
        "Mi 12 Pro", "Mi 12", "Mi 11 Ultra", "Mi 11",
    ],
    "Vivo": [
        "Vivo X90 Pro", "Vivo X80 Pro", "Vivo X80",
        "Vivo V27 Pro", "Vivo V27", "Vivo V25 Pro", "Vivo V25",
        "Vivo Y100", "Vivo Y75",
    ],
    "OPPO": [
        "OPPO Find X6 Pro", "OPPO Find X6", "OPPO Find X5 Pro", "OPPO Find X5",
        "OPPO Reno 10 Pro+", "OPPO Reno 10 Pro", "OPPO Reno 10",
        "OPPO F23", "OPPO F21 Pro",
    ],
    "Nothing": ["Nothing Phone (2)", "Nothing Phone (1)"],
    "Google": ["Pixel 7 Pro", "Pixel 7", "Pixel 6 Pro", "Pixel 6"],
}

LOGO_OPTIONS = ("With Logo Cut", "Without Logo Cut")
COVERAGE_OPTIONS = ("Full Body Wrap (Cover Sides & Edges)", "Only Back (No Sides)")

COMPOSITE_SEPARATOR = " - "

OnChange = Callable[[str], None]


class InvalidVariantChoice(ValueError):
    """A choice outside its step's domain, or made out of order."""


class VariantSelectionError(ValueError):
    """Add-to-cart attempted without a complete selection. Message is user-facing."""


class ComposerState(str, Enum):
    EMPTY = "empty"
    BRAND_CHOSEN = "brand_chosen"
    MODEL_CHOSEN = "model_chosen"
    LOGO_CHOSEN = "logo_chosen"
    COMPLETE = "complete"


def compose_variant(model: str, coverage_option: str, logo_option: str) -> str:
    return COMPOSITE_SEPARATOR.join((model, coverage_option, logo_option))


class VariantComposer:
    incomplete_message = "Please select your device model"

    def __init__(
        self,
        on_change: Optional[OnChange] = None,
        brands: Optional[Dict[str, List[str]]] = None,
    ):
        self.on_change = on_change
        self.brands = brands if brands is not None else MOBILE_BRANDS
        self.brand: Optional[str] = None
        self.model: Optional[str] = None
        self.logo_option: Optional[str] = None
        self.coverage_option: Optional[str] = None

    @property
    def state(self) -> ComposerState:
        if self.coverage_option:
            return ComposerState.COMPLETE
        if self.logo_option:
            return ComposerState.LOGO_CHOSEN
        if self.model:
            return ComposerState.MODEL_CHOSEN
        if self.brand:
            return ComposerState.BRAND_CHOSEN
        return ComposerState.EMPTY

    @property
    def is_complete(self) -> bool:
        return self.state is ComposerState.COMPLETE

    @property
    def variant(self) -> Optional[str]:
        """Composite string, or None until every step is set."""
        if not self.is_complete:
            return None
        return compose_variant(self.model, self.coverage_option, self.logo_option)

    def models(self) -> List[str]:
        """Valid models for the current brand (empty before step 1)."""
        if not self.brand:
            return []
        return list(self.brands.get(self.brand, []))

    def choose_brand(self, brand: str) -> None:
        if brand not in self.brands:
            raise InvalidVariantChoice(f"Unknown brand: {brand}")
        self.brand = brand
        self.model = self.logo_option = self.coverage_option = None
        logger.debug("Brand chosen: %s", brand)

    def choose_model(self, model: str) -> None:
        if not self.brand:
            raise InvalidVariantChoice("Choose a brand first")
        if model not in self.brands[self.brand]:
            raise InvalidVariantChoice(f"{model} is not a {self.brand} model")
        self.model = model
        self.logo_option = self.coverage_option = None

    def choose_logo_option(self, option: str) -> None:
        if not self.model:
            raise InvalidVariantChoice("Choose a device model first")
        if option not in LOGO_OPTIONS:
            raise InvalidVariantChoice(f"Unknown logo option: {option}")
        self.logo_option = option
        self.coverage_option = None

    def choose_coverage_option(self, option: str) -> None:
        if not self.logo_option:
            raise InvalidVariantChoice("Choose a logo option first")
        if option not in COVERAGE_OPTIONS:
            raise InvalidVariantChoice(f"Unknown coverage option: {option}")
        self.coverage_option = option
        composite = self.variant
        logger.debug("Variant complete: %s", composite)
        if self.on_change is not None:
            self.on_change(composite)


class FlatVariantSelector:
    incomplete_message = "Please select a variant"

    def __init__(self, options: Sequence[str], on_change: Optional[OnChange] = None):
        self.options = list(options)
        self.on_change = on_change
        self.selected: Optional[str] = None

    @property
    def variant(self) -> Optional[str]:
        return self.selected or None

    @property
    def is_complete(self) -> bool:
        return bool(self.selected)

    def choose(self, option: str) -> None:
        if option not in self.options:
            raise InvalidVariantChoice(f"Unknown option: {option}")
        self.selected = option
        if self.on_change is not None:
            self.on_change(option)


VariantSelector = Union[VariantComposer, FlatVariantSelector]


def selector_for_product(product: Product, on_change: Optional[OnChange] = None) -> VariantSelector:
    """
    Device skins get the guided composer, with the brand pre-selected when
    the product's first option names a known brand. Other products get a
    flat selector pre-set to their first option.
    """
    options = product.variants.options
    if product.is_device_skin:
        composer = VariantComposer(on_change=on_change)
        if options and options[0] in composer.brands:
            composer.choose_brand(options[0])
        return composer

    selector = FlatVariantSelector(options, on_change=on_change)
    if options:
        selector.selected = options[0]
    return selector


def require_variant(selector: VariantSelector) -> str:
    """Return the selected variant or raise the user-facing error."""
    variant = selector.variant
    if not variant:
        raise VariantSelectionError(selector.incomplete_message)
    return variant
