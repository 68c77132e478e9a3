from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shelfkeeper.core.constants import Category
from shelfkeeper.core.records import match_category


class ProductBase(BaseModel):
    barcode: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: Category = Category.HOUSEHOLD
    price: float = Field(default=0.0, ge=0)

    @field_validator("barcode", "name", mode="before")
    @classmethod
    def _strip_text(cls, value):
        return str(value).strip() if value is not None else value

    @field_validator("category", mode="before")
    @classmethod
    def _category_identifier(cls, value):
        return match_category(value) or value


class ProductCreate(ProductBase):
    pass


class ProductRead(ProductBase):
    model_config = ConfigDict(from_attributes=True)


class ProductLookup(BaseModel):
    barcode: str
    found: bool
    product: Optional[ProductRead] = None
