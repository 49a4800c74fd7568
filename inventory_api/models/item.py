"""Item model."""
from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.sql import func

from inventory_api.database import Base


class Item(Base):
    """Item model - one row per stocked product."""
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_items_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_items_price_non_negative"),
        # Deleted ids must never be handed out again
        {"sqlite_autoincrement": True},
    )
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    sku = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False, default=0)
    quantity = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Item id={self.id} sku={self.sku!r} quantity={self.quantity}>"
