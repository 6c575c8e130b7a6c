from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Integer, Numeric, Boolean, DateTime, func
import datetime

class Base(DeclarativeBase):
    pass

class InventoryItem(Base):
    __tablename__ = "inventory_items"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    item_name: Mapped[str] = mapped_column(String(255))
    quantity: Mapped[int] = mapped_column(Integer)
    per_unit_price: Mapped[float] = mapped_column(Numeric(10, 2))
    # Always quantity * per_unit_price, recomputed by the service on every write
    total_price: Mapped[float] = mapped_column(Numeric(10, 2))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime.datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

class DiscountCoupon(Base):
    __tablename__ = "discount_coupons"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    coupon_code: Mapped[str] = mapped_column(String(50), unique=True)
    discount_percentage: Mapped[float] = mapped_column(Numeric(5, 2))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

# Coupons inserted at startup when missing; existing codes are left untouched
SEED_COUPONS = [
    {"coupon_code": "1212", "discount_percentage": 5, "is_active": True},
    {"coupon_code": "1313", "discount_percentage": 10, "is_active": True},
    {"coupon_code": "1414", "discount_percentage": 15, "is_active": True},
    {"coupon_code": "1515", "discount_percentage": 20, "is_active": True},
    {"coupon_code": "1616", "discount_percentage": 25, "is_active": True},
    {"coupon_code": "1717", "discount_percentage": 50, "is_active": True},
]
