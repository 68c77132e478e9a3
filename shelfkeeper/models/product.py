from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, UniqueConstraint

from shelfkeeper.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False)

    barcode = Column(String, nullable=False)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "barcode", name="uq_products_user_barcode"),
        Index("idx_products_barcode", "barcode"),
    )


__all__ = ["Product"]
