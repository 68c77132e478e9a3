from fastapi import APIRouter, Depends

from shelfkeeper.dependencies import get_workspace
from shelfkeeper.schemas.inventory import ReportRead
from shelfkeeper.services.dashboard_service import report_summary

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("", response_model=ReportRead)
def read_report(workspace=Depends(get_workspace)):
    return report_summary(workspace)


__all__ = ["router"]
