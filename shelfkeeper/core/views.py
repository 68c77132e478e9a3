from typing import Iterable, Optional

from shelfkeeper.core.constants import (
    ALL_CATEGORIES,
    HORIZONS,
    MONTH_HORIZON_DAYS,
    URGENCY_FILTERS,
    WEEK_HORIZON_DAYS,
    Category,
)
from shelfkeeper.core.enrichment import EnrichedBatch
from shelfkeeper.core.expiry_rules import classify, default_alert_settings
from shelfkeeper.core.records import match_category

URGENCY_FILTER_ALIASES = {
    "all": "all",
    "any": "all",
    "expired": "expired",
    "critical": "critical",
    "urgent": "critical",
    "warning": "warning",
    "soon": "warning",
    "safe": "safe",
    "ok": "safe",
}


def normalize_urgency_filter(value) -> str:
    if value is None:
        return "all"
    key = str(value).strip().lower()
    if not key:
        return "all"
    normalized = URGENCY_FILTER_ALIASES.get(key)
    if normalized is None:
        raise ValueError(
            "Unknown status filter {!r}; expected one of {}".format(value, ", ".join(URGENCY_FILTERS))
        )
    return normalized


def normalize_horizon(value) -> Optional[str]:
    if value is None:
        return None
    key = str(value).strip().lower()
    if not key:
        return None
    if key not in HORIZONS:
        raise ValueError("Unknown horizon {!r}; expected one of {}".format(value, ", ".join(HORIZONS)))
    return key


def in_horizon(days_until_expiry: int, horizon: str) -> bool:
    # expired batches belong to no horizon
    if horizon == "week":
        return 0 <= days_until_expiry <= WEEK_HORIZON_DAYS
    if horizon == "month":
        return WEEK_HORIZON_DAYS < days_until_expiry <= MONTH_HORIZON_DAYS
    if horizon == "future":
        return days_until_expiry > MONTH_HORIZON_DAYS
    return False


def normalize_category_filter(value) -> Optional[Category]:
    if value is None:
        return None
    if isinstance(value, Category):
        return value
    text = str(value).strip()
    if not text or text.casefold() == ALL_CATEGORIES.casefold():
        return None
    category = match_category(text)
    if category is None:
        raise ValueError("Unknown category {!r}".format(value))
    return category


def _matches_search(batch: EnrichedBatch, search_text: str) -> bool:
    if not search_text:
        return True
    return search_text in batch.product_name.casefold()


def select_view(
    enriched: Iterable[EnrichedBatch],
    *,
    horizon=None,
    status_filter=None,
    category=None,
    search=None,
    alert_settings=None,
) -> list[EnrichedBatch]:
    """Filter enriched batches for a screen and order them soonest-expiring first.

    Horizon tabs (week/month/future) apply to active batches only. The urgency
    filter is what the full inventory list uses instead of a horizon. Every
    given predicate must hold; ties keep their input order.
    """
    horizon = normalize_horizon(horizon)
    urgency = normalize_urgency_filter(status_filter)
    if alert_settings is None:
        alert_settings = default_alert_settings()
    category = normalize_category_filter(category)
    search_text = str(search).strip().casefold() if search else ""

    selected = []
    for batch in enriched:
        if horizon is not None:
            if batch.status != "active" or not in_horizon(batch.days_until_expiry, horizon):
                continue
        if not _matches_search(batch, search_text):
            continue
        if category is not None and batch.category != category:
            continue
        if urgency != "all":
            setting = alert_settings.lookup_or_default(batch.category)
            if classify(batch.days_until_expiry, setting) != urgency:
                continue
        selected.append(batch)

    return sorted(selected, key=lambda item: item.days_until_expiry)


__all__ = [
    "in_horizon",
    "normalize_category_filter",
    "normalize_horizon",
    "normalize_urgency_filter",
    "select_view",
]
