from dataclasses import dataclass
from datetime import date
from typing import Optional

from shelfkeeper.core.constants import DEFAULT_STORE_PROFILE, FALLBACK_CATEGORY, Category


def _category_key(value) -> str:
    return "".join(ch for ch in str(value).casefold() if ch.isalnum())


_CATEGORY_KEYS = {
    key: member
    for member in Category
    for key in (_category_key(member.value), _category_key(member.name))
}


def match_category(value) -> Optional[Category]:
    """Category for a display value ("Meat & Fish") or identifier ("MeatFish", "MEAT_FISH")."""
    if value is None or isinstance(value, Category):
        return value
    return _CATEGORY_KEYS.get(_category_key(value))


def parse_category(value) -> Category:
    """Like :func:`match_category`, but Household when unknown."""
    return match_category(value) or FALLBACK_CATEGORY


@dataclass(frozen=True)
class ProductRecord:
    barcode: str
    name: str
    category: Category
    price: float = 0.0


@dataclass(frozen=True)
class BatchRecord:
    id: str
    barcode: str
    expiry_date: date
    quantity: int
    status: str = "active"
    added_date: Optional[date] = None


@dataclass(frozen=True)
class StoreProfileRecord:
    store_name: str
    owner_name: str
    email: str
    phone: str
    currency: str
    default_markdown_percent: float

    @classmethod
    def default(cls) -> "StoreProfileRecord":
        return cls(**DEFAULT_STORE_PROFILE)


__all__ = ["BatchRecord", "ProductRecord", "StoreProfileRecord", "match_category", "parse_category"]
