from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, JSON

from storefront.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, nullable=False, index=True)

    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String, nullable=False, default="pending")  # free text, admin driven
    # copy of the address at order time, never a live reference
    shipping_address = Column(JSON, nullable=True)
    payment_method = Column(String, nullable=False)
    utr_number = Column(String(12), nullable=True)
    payment_status = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
