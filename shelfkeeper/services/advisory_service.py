import base64
import binascii
import logging
from typing import Iterable, Optional

from shelfkeeper.core.constants import (
    FALLBACK_MARKDOWN_RATE,
    MAX_BUNDLE_ITEMS,
    VALUE_AT_RISK_WINDOW_DAYS,
)
from shelfkeeper.core.enrichment import EnrichedBatch, index_products
from shelfkeeper.core.errors import AdvisoryError
from shelfkeeper.core.records import ProductRecord
from shelfkeeper.schemas.advisory import BundleIdea, LabelScanResult, PriceSuggestion

logger = logging.getLogger(__name__)

FALLBACK_PRICE_REASON = "AI unavailable. Defaulting to 50% off."
FALLBACK_BUNDLE = BundleIdea(
    title="Clearance Sale",
    tagline="Grab these items at a discount before they're gone!",
)
LABEL_FAILURE_MESSAGE = "Could not analyze image. Please try again."


def fallback_price(current_price: float) -> PriceSuggestion:
    return PriceSuggestion(
        suggested_price=float(current_price) * FALLBACK_MARKDOWN_RATE,
        reasoning=FALLBACK_PRICE_REASON,
        fallback=True,
    )


def suggest_price(advisor, product_name, current_price, days_until_expiry, category, *, currency="GBP"):
    """Clearance price for one product; any advisory failure yields the 50% default."""
    try:
        return advisor.suggest_price(
            product_name,
            current_price,
            days_until_expiry,
            category,
            currency=currency,
        )
    except AdvisoryError as exc:
        logger.warning("Price suggestion for %s failed: %s", product_name, exc)
        return fallback_price(current_price)


def suggest_markdown_price(advisor, batch: EnrichedBatch, *, currency="GBP") -> PriceSuggestion:
    return suggest_price(
        advisor,
        batch.product_name,
        batch.price,
        batch.days_until_expiry,
        batch.category,
        currency=currency,
    )


def suggest_bundle(advisor, product_names: Iterable[str]) -> BundleIdea:
    names = list(product_names)[:MAX_BUNDLE_ITEMS]
    try:
        return advisor.suggest_bundle(names)
    except AdvisoryError as exc:
        logger.warning("Bundle suggestion failed: %s", exc)
        return FALLBACK_BUNDLE


def clearance_candidates(enriched: Iterable[EnrichedBatch]) -> list[str]:
    """Unique product names, in first-seen order, of stock expiring within a week."""
    names = []
    for batch in enriched:
        if 0 <= batch.days_until_expiry <= VALUE_AT_RISK_WINDOW_DAYS and batch.product_name not in names:
            names.append(batch.product_name)
    return names


def suggest_clearance_bundle(advisor, enriched: Iterable[EnrichedBatch]) -> Optional[BundleIdea]:
    names = clearance_candidates(enriched)
    if not names:
        return None
    return suggest_bundle(advisor, names)


def decode_image_data(image_data: str) -> bytes:
    value = (image_data or "").strip()
    if value.startswith("data:") and "," in value:
        value = value.split(",", 1)[1]
    try:
        decoded = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Image data must be base64 encoded") from exc
    if not decoded:
        raise ValueError("Image data required")
    return decoded


def scan_label(advisor, image_bytes: bytes, mime_type: str, products: Iterable[ProductRecord]) -> LabelScanResult:
    """Read a product label and match it against the owner's catalogue.

    There is no fallback for a failed scan; the caller surfaces the error.
    """
    try:
        analysis = advisor.analyze_label_image(image_bytes, mime_type)
    except AdvisoryError as exc:
        logger.warning("Label analysis failed: %s", exc)
        raise AdvisoryError(LABEL_FAILURE_MESSAGE) from exc

    known = index_products(products).get(analysis.barcode)
    if known is not None:
        return LabelScanResult(
            barcode=analysis.barcode,
            expiry_date=analysis.expiry_date,
            is_new_product=False,
            product_name=known.name,
            category=known.category,
            price=known.price,
        )
    return LabelScanResult(
        barcode=analysis.barcode,
        expiry_date=analysis.expiry_date,
        is_new_product=True,
        product_name=analysis.product_name,
        category=analysis.category,
    )


__all__ = [
    "FALLBACK_BUNDLE",
    "FALLBACK_PRICE_REASON",
    "clearance_candidates",
    "decode_image_data",
    "fallback_price",
    "scan_label",
    "suggest_bundle",
    "suggest_clearance_bundle",
    "suggest_markdown_price",
    "suggest_price",
]
