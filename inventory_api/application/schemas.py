from pydantic import BaseModel, Field
from datetime import datetime
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

class Envelope(BaseModel, Generic[T]):
    """Uniform success body; error bodies are rendered by the exception handlers"""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None

class InventoryItemPayload(BaseModel):
    # Optional so that missing fields reach the "All fields are required" check
    item_name: Optional[str] = None
    quantity: Optional[int] = None
    per_unit_price: Optional[float] = Field(default=None, allow_inf_nan=False)

class BulkItemPayload(InventoryItemPayload):
    id: Optional[int] = None

class BulkUpdatePayload(BaseModel):
    items: Optional[list[BulkItemPayload]] = None

class InventoryItemRead(BaseModel):
    id: int
    item_name: str
    quantity: int
    per_unit_price: float
    total_price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class DiscountCouponRead(BaseModel):
    id: int
    coupon_code: str
    discount_percentage: float
    is_active: bool

    class Config:
        from_attributes = True
