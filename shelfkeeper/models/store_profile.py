from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, String

from shelfkeeper.database.base import Base


class StoreProfile(Base):
    __tablename__ = "store_profiles"

    user_id = Column(String, primary_key=True)

    store_name = Column(String, nullable=False, default="")
    owner_name = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")
    currency = Column(String(3), nullable=False, default="GBP")
    default_markdown_percent = Column(Float, nullable=False, default=50)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


__all__ = ["StoreProfile"]
