from fastapi import APIRouter, Depends, HTTPException, Query

from shelfkeeper.dependencies import get_advisor, get_workspace
from shelfkeeper.schemas.advisory import BundleIdea
from shelfkeeper.schemas.inventory import DashboardRead
from shelfkeeper.services.advisory_service import suggest_clearance_bundle
from shelfkeeper.services.dashboard_service import dashboard_summary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardRead)
def dashboard(
    horizon: str = Query("week", description="week, month or future"),
    workspace=Depends(get_workspace),
):
    try:
        return dashboard_summary(workspace, horizon=horizon)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/bundle-suggestion", response_model=BundleIdea)
def bundle_suggestion(workspace=Depends(get_workspace), advisor=Depends(get_advisor)):
    bundle = suggest_clearance_bundle(advisor, workspace.enriched())
    if bundle is None:
        raise HTTPException(status_code=404, detail="No items expire within 7 days.")
    return bundle


__all__ = ["router"]
