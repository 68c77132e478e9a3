from fastapi import APIRouter, Depends

from shelfkeeper.core.records import StoreProfileRecord
from shelfkeeper.dependencies import get_workspace
from shelfkeeper.schemas.profile import StoreProfileRead, StoreProfileSaveResult, StoreProfileUpdate

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=StoreProfileRead)
def read_profile(workspace=Depends(get_workspace)):
    return workspace.profile


@router.put("", response_model=StoreProfileSaveResult)
def update_profile(payload: StoreProfileUpdate, workspace=Depends(get_workspace)):
    result = workspace.update_profile(StoreProfileRecord(**payload.model_dump()))
    return {"profile": workspace.profile, "saved": result.ok, "error": result.error}


__all__ = ["router"]
