from datetime import date
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from shelfkeeper.core.constants import BATCH_STATUSES, Category
from shelfkeeper.schemas.product import ProductCreate


class BatchIntake(BaseModel):
    barcode: str = Field(min_length=1)
    expiry_date: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("expiryDate", "expiry_date"),
    )
    expires_in_days: Optional[int] = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("expiresInDays", "expires_in_days"),
        description="Quick date: expiry is today plus this many days",
    )
    quantity: int = Field(gt=0)
    new_product: Optional[ProductCreate] = Field(
        default=None,
        validation_alias=AliasChoices("newProduct", "new_product"),
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("barcode", mode="before")
    @classmethod
    def _strip_barcode(cls, value):
        return str(value).strip() if value is not None else value

    @model_validator(mode="after")
    def _check_expiry(self):
        if self.expiry_date is None and self.expires_in_days is None:
            raise ValueError("expiry_date or expires_in_days is required")
        if self.new_product is not None and self.new_product.barcode != self.barcode:
            raise ValueError("new_product.barcode must match barcode")
        return self


class BatchStatusUpdate(BaseModel):
    status: str

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value):
        text = str(value or "").strip().lower()
        if text not in BATCH_STATUSES:
            raise ValueError("status must be one of {}".format(", ".join(BATCH_STATUSES)))
        return text


class BatchRead(BaseModel):
    id: str
    barcode: str
    expiry_date: date
    quantity: int
    status: str
    added_date: Optional[date] = None
    product_name: str
    category: Category
    price: float
    days_until_expiry: int
    stock_value: float
    urgency: str

    model_config = ConfigDict(from_attributes=True)


class StatusChangeRead(BaseModel):
    batch_id: str
    status: str
    state: str
    error: Optional[str] = None


class InventoryRead(BaseModel):
    count: int
    results: List[BatchRead] = Field(default_factory=list)


class DashboardStatsRead(BaseModel):
    critical_72h: int
    expired_count: int
    value_at_risk_7d: float


class DashboardRead(BaseModel):
    today: date
    horizon: str
    stats: DashboardStatsRead
    has_urgent_alerts: bool
    currency: str
    results: List[BatchRead] = Field(default_factory=list)


class ReportRead(BaseModel):
    status_counts: Dict[str, int]
    wasted_batches: int
    reduced_batches: int
    wasted_cost: float
    recovered_revenue: float
    recovery_rate: float
    currency: str
