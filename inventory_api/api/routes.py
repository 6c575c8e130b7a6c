from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from inventory_api.infrastructure.db import DataStoreGateway, get_db, get_gateway
from inventory_api.application.service import CouponService, InventoryService, validate_bulk_items
from inventory_api.application.schemas import (
    BulkUpdatePayload,
    DiscountCouponRead,
    Envelope,
    InventoryItemPayload,
    InventoryItemRead,
)
from .errors import store_errors

router = APIRouter(prefix="/api", tags=["inventory"])

def _read(item) -> InventoryItemRead:
    return InventoryItemRead.model_validate(item)

@router.get("/items", response_model=Envelope[list[InventoryItemRead]], response_model_exclude_none=True)
def list_items(db: Session = Depends(get_db)):
    """List all items, newest id first."""
    with store_errors("Failed to fetch items"):
        items = InventoryService(db).list()
    return Envelope(data=[_read(i) for i in items])

@router.get("/items/{item_id}", response_model=Envelope[InventoryItemRead], response_model_exclude_none=True)
def get_item(item_id: int, db: Session = Depends(get_db)):
    with store_errors("Failed to fetch item"):
        item = InventoryService(db).get(item_id)
    return Envelope(data=_read(item))

@router.post("/addItems", response_model=Envelope[InventoryItemRead], response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
def create_item(payload: InventoryItemPayload, db: Session = Depends(get_db)):
    with store_errors("Failed to add item"):
        item = InventoryService(db).create(payload)
    return Envelope(message="Item added successfully", data=_read(item))

@router.put("/items/bulk/update", response_model=Envelope[list[InventoryItemRead]], response_model_exclude_none=True)
def bulk_update_items(
    payload: BulkUpdatePayload,
    db: Session = Depends(get_db),
    gateway: DataStoreGateway = Depends(get_gateway),
):
    """Apply every update in one transaction, then return the full list."""
    items = validate_bulk_items(payload.items)
    with store_errors("Failed to update items"):
        gateway.with_transaction(lambda tx: InventoryService(tx).apply_bulk_update(items))
        updated = InventoryService(db).list()
    return Envelope(message="All items updated successfully", data=[_read(i) for i in updated])

@router.put("/items/{item_id}", response_model=Envelope[InventoryItemRead], response_model_exclude_none=True)
def update_item(item_id: int, payload: InventoryItemPayload, db: Session = Depends(get_db)):
    with store_errors("Failed to update item"):
        item = InventoryService(db).update(item_id, payload)
    return Envelope(message="Item updated successfully", data=_read(item))

@router.delete("/items/{item_id}", response_model=Envelope[None], response_model_exclude_none=True)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    with store_errors("Failed to delete item"):
        InventoryService(db).delete(item_id)
    return Envelope(message="Item deleted successfully")

@router.get("/discount/{coupon_code}", response_model=Envelope[DiscountCouponRead], response_model_exclude_none=True)
def get_discount(coupon_code: str, gateway: DataStoreGateway = Depends(get_gateway)):
    with store_errors("Failed to fetch discount"):
        coupon = CouponService(gateway).lookup(coupon_code)
    return Envelope(data=coupon)
