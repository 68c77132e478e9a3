from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from shelfkeeper.core.constants import FALLBACK_CATEGORY, UNKNOWN_PRODUCT_NAME, Category
from shelfkeeper.core.dates import days_until_expiry
from shelfkeeper.core.records import BatchRecord, ProductRecord


@dataclass(frozen=True)
class EnrichedBatch:
    id: str
    barcode: str
    expiry_date: date
    quantity: int
    status: str
    added_date: Optional[date]
    product_name: str
    category: Category
    price: float
    days_until_expiry: int

    @property
    def stock_value(self) -> float:
        return self.price * self.quantity


def index_products(products: Iterable[ProductRecord]) -> dict[str, ProductRecord]:
    index = {}
    for product in products:
        # first match wins when a barcode is duplicated
        index.setdefault(product.barcode, product)
    return index


def enrich_batch(batch: BatchRecord, product: Optional[ProductRecord], today: date) -> EnrichedBatch:
    if product is None:
        name, category, price = UNKNOWN_PRODUCT_NAME, FALLBACK_CATEGORY, 0.0
    else:
        name, category, price = product.name, product.category, product.price

    return EnrichedBatch(
        id=batch.id,
        barcode=batch.barcode,
        expiry_date=batch.expiry_date,
        quantity=batch.quantity,
        status=batch.status,
        added_date=batch.added_date,
        product_name=name,
        category=category,
        price=float(price or 0.0),
        days_until_expiry=days_until_expiry(batch.expiry_date, today),
    )


def enrich(
    batches: Iterable[BatchRecord],
    products: Iterable[ProductRecord],
    today: Optional[date] = None,
    *,
    active_only: bool = True,
) -> list[EnrichedBatch]:
    """Join batches with their products and compute days until expiry.

    The dashboard view only carries active batches, so that is the default.
    Reporting needs every status and passes ``active_only=False``.
    """
    if today is None:
        today = date.today()
    product_index = index_products(products)

    enriched = []
    for batch in batches:
        if active_only and batch.status != "active":
            continue
        enriched.append(enrich_batch(batch, product_index.get(batch.barcode), today))
    return enriched


__all__ = ["EnrichedBatch", "enrich", "enrich_batch", "index_products"]
