from pydantic import BaseModel, ConfigDict, Field, field_validator


class StoreProfileBase(BaseModel):
    store_name: str = ""
    owner_name: str = ""
    email: str = ""
    phone: str = ""
    currency: str = Field(default="GBP", min_length=3, max_length=3)
    default_markdown_percent: float = Field(default=50.0, ge=0, le=100)

    @field_validator("currency", mode="before")
    @classmethod
    def _upper_currency(cls, value):
        return str(value or "").strip().upper()


class StoreProfileUpdate(StoreProfileBase):
    pass


class StoreProfileRead(StoreProfileBase):
    model_config = ConfigDict(from_attributes=True)


class StoreProfileSaveResult(BaseModel):
    profile: StoreProfileRead
    saved: bool
    error: str | None = None
