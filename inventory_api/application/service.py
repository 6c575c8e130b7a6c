from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from inventory_api.domain.errors import NotFoundError, ValidationError
from inventory_api.domain.models import DiscountCoupon, InventoryItem
from inventory_api.infrastructure.db import DataStoreGateway
from .schemas import BulkItemPayload, DiscountCouponRead, InventoryItemPayload

CENTS = Decimal("0.01")

def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)

def compute_total_price(quantity: int, per_unit_price: Decimal) -> Decimal:
    return to_money(Decimal(quantity) * per_unit_price)

def validate_item_fields(payload: InventoryItemPayload) -> Decimal:
    """
    Required means truthy: an empty name or a quantity/price of exactly 0
    counts as missing and is rejected before the positivity check.

    The price is checked after rounding to cents, which is how it is stored,
    and the rounded price is returned.
    """
    price = None
    if payload.per_unit_price is not None:
        try:
            price = to_money(payload.per_unit_price)
        except InvalidOperation:
            raise ValidationError("Invalid request payload")
    if not payload.item_name or not payload.quantity or not price:
        raise ValidationError("All fields are required")
    if payload.quantity <= 0 or price <= 0:
        raise ValidationError("Quantity and price must be positive values")
    return price

def validate_bulk_items(items: Optional[List[BulkItemPayload]]) -> List[BulkItemPayload]:
    if items is None:
        raise ValidationError("Items array is required")
    for item in items:
        if item.id is None:
            raise ValidationError("All fields are required")
        validate_item_fields(item)
    return items

class InventoryService:
    def __init__(self, db: Session):
        self.db = db

    def list(self):
        return self.db.query(InventoryItem).order_by(InventoryItem.id.desc()).all()

    def get(self, item_id: int) -> InventoryItem:
        item = self.db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
        if not item:
            raise NotFoundError("Item not found")
        return item

    def create(self, data: InventoryItemPayload) -> InventoryItem:
        validate_item_fields(data)
        item = InventoryItem()
        self._assign(item, data)
        self.db.add(item)
        self.db.commit()
        # re-read so store-managed timestamps are populated
        self.db.refresh(item)
        return item

    def update(self, item_id: int, data: InventoryItemPayload) -> InventoryItem:
        validate_item_fields(data)
        item = self.get(item_id)
        self._assign(item, data)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, item_id: int) -> None:
        item = self.get(item_id)
        self.db.delete(item)
        self.db.commit()

    def apply_bulk_update(self, items: List[BulkItemPayload]) -> int:
        """
        Update every item in order on this session without committing.

        Meant to run inside DataStoreGateway.with_transaction so that a
        missing id or a store failure rolls back the whole batch.
        """
        for data in items:
            item = self.db.get(InventoryItem, data.id)
            if item is None:
                raise NotFoundError(f"Item {data.id} not found")
            self._assign(item, data)
            self.db.flush()
        return len(items)

    @staticmethod
    def _assign(item: InventoryItem, data: InventoryItemPayload) -> None:
        item.item_name = data.item_name
        item.quantity = data.quantity
        price = to_money(data.per_unit_price)
        item.per_unit_price = price
        # total follows the stored (rounded) price
        item.total_price = compute_total_price(data.quantity, price)

class CouponService:
    def __init__(self, gateway: DataStoreGateway):
        self.gateway = gateway

    def lookup(self, coupon_code: str) -> DiscountCouponRead:
        """Exact, case-sensitive match on the trimmed code among active coupons"""
        rows = self.gateway.execute(
            select(DiscountCoupon).where(
                DiscountCoupon.coupon_code == coupon_code.strip(),
                DiscountCoupon.is_active.is_(True),
            )
        )
        if not rows:
            raise NotFoundError("Invalid or inactive coupon code")
        return DiscountCouponRead.model_validate(rows[0])
