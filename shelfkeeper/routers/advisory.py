import logging

from fastapi import APIRouter, Depends, HTTPException

from shelfkeeper.core.constants import DEFAULT_CURRENCY
from shelfkeeper.core.errors import AdvisoryError, StoreError
from shelfkeeper.dependencies import get_advisor, get_gateway, get_workspace
from shelfkeeper.schemas.advisory import (
    BundleIdea,
    BundleRequest,
    LabelScanRequest,
    LabelScanResult,
    PriceRequest,
    PriceSuggestion,
)
from shelfkeeper.services.advisory_service import (
    decode_image_data,
    scan_label,
    suggest_bundle,
    suggest_price,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/advisory", tags=["Advisory"])


@router.post("/label", response_model=LabelScanResult)
def analyze_label(payload: LabelScanRequest, workspace=Depends(get_workspace), advisor=Depends(get_advisor)):
    try:
        image_bytes = decode_image_data(payload.image_data)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    try:
        return scan_label(advisor, image_bytes, payload.mime_type, workspace.products)
    except AdvisoryError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.post("/bundle", response_model=BundleIdea)
def bundle(payload: BundleRequest, advisor=Depends(get_advisor)):
    return suggest_bundle(advisor, payload.items)


@router.post("/price", response_model=PriceSuggestion)
def price(payload: PriceRequest, gateway=Depends(get_gateway), advisor=Depends(get_advisor)):
    try:
        currency = gateway.get_profile().currency
    except StoreError as exc:
        logger.warning("Store profile unavailable, pricing in %s: %s", DEFAULT_CURRENCY, exc)
        currency = DEFAULT_CURRENCY
    return suggest_price(
        advisor,
        payload.product_name,
        payload.price,
        payload.days_until_expiry,
        payload.category,
        currency=currency,
    )


__all__ = ["router"]
