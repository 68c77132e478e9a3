from datetime import date
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from shelfkeeper.core.constants import MAX_BUNDLE_ITEMS, Category
from shelfkeeper.core.dates import normalize_date
from shelfkeeper.core.records import match_category


class LabelAnalysis(BaseModel):
    barcode: str = Field(min_length=1)
    expiry_date: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("expiryDate", "expiry_date"),
    )
    product_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("productName", "product_name"),
    )
    category: Optional[Category] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("barcode", mode="before")
    @classmethod
    def _strip_barcode(cls, value):
        return str(value).strip() if value is not None else value

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _parse_expiry(cls, value):
        # unreadable dates are dropped rather than failing the whole scan
        return normalize_date(value)

    @field_validator("product_name", mode="before")
    @classmethod
    def _blank_name(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, value):
        return match_category(value)


class BundleIdea(BaseModel):
    title: str
    tagline: str


class PriceSuggestion(BaseModel):
    suggested_price: float = Field(
        ge=0,
        validation_alias=AliasChoices("suggestedPrice", "suggested_price", "price"),
    )
    reasoning: str = Field(
        default="",
        validation_alias=AliasChoices("reasoning", "reason"),
    )
    fallback: bool = False

    model_config = ConfigDict(populate_by_name=True)


class LabelScanRequest(BaseModel):
    image_data: str = Field(
        min_length=1,
        validation_alias=AliasChoices("imageData", "image_data"),
        description="Base64-encoded image, with or without a data: URL prefix",
    )
    mime_type: str = Field(
        default="image/jpeg",
        validation_alias=AliasChoices("mimeType", "mime_type"),
    )

    model_config = ConfigDict(populate_by_name=True)


class LabelScanResult(BaseModel):
    barcode: str
    expiry_date: Optional[date] = None
    is_new_product: bool
    product_name: Optional[str] = None
    category: Optional[Category] = None
    price: Optional[float] = None


class BundleRequest(BaseModel):
    items: List[str] = Field(min_length=1)

    @field_validator("items")
    @classmethod
    def _clean_items(cls, value):
        cleaned = [str(item).strip() for item in value if str(item).strip()]
        if not cleaned:
            raise ValueError("Items array required")
        return cleaned[:MAX_BUNDLE_ITEMS]


class PriceRequest(BaseModel):
    product_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("productName", "product_name"),
    )
    price: float = Field(ge=0)
    days_until_expiry: int = Field(
        validation_alias=AliasChoices("daysUntilExpiry", "days_until_expiry"),
    )
    category: Optional[Category] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("category", mode="before")
    @classmethod
    def _category_identifier(cls, value):
        return match_category(value) or value
