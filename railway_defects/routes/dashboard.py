from fastapi import APIRouter, Depends, HTTPException

from railway_defects.dependencies.stores import get_report_store, get_user_store
from railway_defects.schemas.dashboard import DashboardSummary
from railway_defects.services.aggregation import summarize

router = APIRouter()


@router.get("/dashboard/summary", response_model=DashboardSummary)
async def get_dashboard_summary(reports=Depends(get_report_store), users=Depends(get_user_store)):
    try:
        summary = summarize(await reports.list_reports(), users=await users.list_users())
        print(
            f"Dashboard summary: critical={summary.severity.critical}, "
            f"resolved this month={summary.resolved_this_month}, active teams={summary.active_team_count}"
        )
        return summary
    except Exception as e:
        print(f"Error building dashboard summary: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error building dashboard summary: {str(e)}")
