from fastapi import APIRouter, Depends

from shelfkeeper.dependencies import get_workspace
from shelfkeeper.schemas.product import ProductLookup

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("/{barcode}", response_model=ProductLookup)
def get_product(barcode: str, workspace=Depends(get_workspace)):
    product = workspace.find_product(barcode)
    if product is None:
        return {"barcode": barcode, "found": False, "product": None}
    return {"barcode": barcode, "found": True, "product": product}


__all__ = ["router"]
