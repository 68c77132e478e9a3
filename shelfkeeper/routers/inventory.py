from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from shelfkeeper.core.dates import days_from_today
from shelfkeeper.core.errors import StoreError
from shelfkeeper.core.records import BatchRecord, ProductRecord
from shelfkeeper.dependencies import get_advisor, get_workspace
from shelfkeeper.schemas.advisory import PriceSuggestion
from shelfkeeper.schemas.inventory import BatchIntake, BatchRead, BatchStatusUpdate, InventoryRead, StatusChangeRead
from shelfkeeper.services.advisory_service import suggest_markdown_price
from shelfkeeper.services.dashboard_service import batch_payload, inventory_listing
from shelfkeeper.services.workspace import OperationState

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=InventoryRead)
def list_inventory(
    status_filter: Optional[str] = Query(None, alias="status", description="all, expired, critical, warning or safe"),
    category: Optional[str] = Query(None, description="Category name or All"),
    q: Optional[str] = Query(None, description="Product name search"),
    workspace=Depends(get_workspace),
):
    try:
        return inventory_listing(workspace, status_filter=status_filter, category=category, search=q)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/batches", response_model=BatchRead, status_code=status.HTTP_201_CREATED)
def add_batch(payload: BatchIntake, workspace=Depends(get_workspace)):
    expiry_date = payload.expiry_date
    if expiry_date is None:
        expiry_date = days_from_today(payload.expires_in_days, workspace.today())

    new_product = None
    if payload.new_product is not None:
        new_product = ProductRecord(
            barcode=payload.new_product.barcode,
            name=payload.new_product.name,
            category=payload.new_product.category,
            price=payload.new_product.price,
        )
    elif workspace.find_product(payload.barcode) is None:
        raise HTTPException(
            status_code=400,
            detail="Unknown barcode {}; include new_product details.".format(payload.barcode),
        )

    batch = BatchRecord(
        id="",
        barcode=payload.barcode,
        expiry_date=expiry_date,
        quantity=payload.quantity,
    )
    try:
        saved = workspace.add_batch(batch, new_product=new_product)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=502, detail="Failed to save batch.") from exc

    return batch_payload(workspace.find_batch(saved.id), workspace.alert_settings)


@router.patch("/batches/{batch_id}/status", response_model=StatusChangeRead)
def change_batch_status(batch_id: str, payload: BatchStatusUpdate, workspace=Depends(get_workspace)):
    try:
        result = workspace.update_batch_status(batch_id, payload.status)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if result.state == OperationState.ROLLED_BACK:
        raise HTTPException(status_code=502, detail=result.error)
    return {
        "batch_id": batch_id,
        "status": payload.status,
        "state": result.state.value,
        "error": result.error,
    }


@router.post("/batches/{batch_id}/markdown-suggestion", response_model=PriceSuggestion)
def markdown_suggestion(batch_id: str, workspace=Depends(get_workspace), advisor=Depends(get_advisor)):
    batch = workspace.find_batch(batch_id)
    if batch is None:
        raise HTTPException(status_code=404, detail="Batch not found.")
    return suggest_markdown_price(advisor, batch, currency=workspace.profile.currency)


__all__ = ["router"]
