from datetime import date, datetime, timezone

from sqlalchemy import Column, Date, DateTime, Index, Integer, String

from shelfkeeper.database.base import Base


class Batch(Base):
    __tablename__ = "batches"

    id = Column(String, primary_key=True)
    user_id = Column(String, primary_key=True)

    barcode = Column(String, nullable=False)
    expiry_date = Column(Date, nullable=False)
    quantity = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="active")
    added_date = Column(Date, nullable=False, default=date.today)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_batches_user_status", "user_id", "status"),
        Index("idx_batches_user_expiry", "user_id", "expiry_date"),
    )


__all__ = ["Batch"]
