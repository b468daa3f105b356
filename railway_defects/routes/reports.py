from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from railway_defects.dependencies.stores import get_report_store
from railway_defects.models.report import DefectReport
from railway_defects.schemas.dashboard import StatusCounts
from railway_defects.schemas.report import CommentCreate, ReportCreate, ReportUpdate
from railway_defects.services.aggregation import status_counts
from railway_defects.services.normalize import normalize_report, normalize_reports

router = APIRouter()


@router.get("/reports", response_model=List[DefectReport])
async def get_reports(store=Depends(get_report_store)):
    try:
        reports = normalize_reports(await store.list_reports())
        print(f"Reports returned: {len(reports)}")
        return reports
    except Exception as e:
        print(f"Error fetching reports: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error fetching reports: {str(e)}")


# Declared before /reports/{report_id} so "stats" is not taken for an id
@router.get("/reports/stats/pie", response_model=StatusCounts)
async def get_status_pie(store=Depends(get_report_store)):
    try:
        counts = status_counts(await store.list_reports())
        print(f"Status counts: {counts}")
        return counts
    except Exception as e:
        print(f"Error computing status counts: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error computing status counts: {str(e)}")


@router.get("/reports/{report_id}", response_model=DefectReport)
async def get_report(report_id: str, store=Depends(get_report_store)):
    try:
        report = await store.get_report(report_id)
        if not report:
            print(f"Report not found: {report_id}")
            raise HTTPException(status_code=404, detail="Report not found")
        return normalize_report(report)
    except HTTPException as e:
        raise e
    except Exception as e:
        print(f"Error fetching report {report_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error fetching report: {str(e)}")


@router.post("/reports", response_model=DefectReport, status_code=201)
async def create_report(report: ReportCreate, store=Depends(get_report_store)):
    try:
        report_dict = report.model_dump(mode="json", by_alias=True)
        if not report_dict.get("reportDate"):
            report_dict["reportDate"] = datetime.now(timezone.utc).isoformat()
        report_dict["comments"] = []
        created = await store.create_report(report_dict)
        print(f"Report created with ID: {created['id']}")
        return normalize_report(created)
    except Exception as e:
        print(f"Error creating report: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error creating report: {str(e)}")


@router.put("/reports/{report_id}", response_model=DefectReport)
async def update_report(report_id: str, update_data: ReportUpdate, store=Depends(get_report_store)):
    try:
        # explicit nulls leave the stored value unchanged
        update_dict = update_data.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)
        if not update_dict:
            raise HTTPException(status_code=400, detail="No fields to update")
        print(f"Updating report {report_id} with: {update_dict}")

        updated = await store.update_report(report_id, update_dict)
        if not updated:
            print(f"Report not found: {report_id}")
            raise HTTPException(status_code=404, detail="Report not found")
        return normalize_report(updated)
    except HTTPException as e:
        raise e
    except Exception as e:
        print(f"Error updating report: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error updating report: {str(e)}")


@router.post("/reports/{report_id}/comments", response_model=DefectReport, status_code=201)
async def add_comment(report_id: str, comment: CommentCreate, store=Depends(get_report_store)):
    try:
        comment_dict = {
            "author": (comment.author or "").strip() or "Anonymous",
            "text": comment.text.strip(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        updated = await store.add_comment(report_id, comment_dict)
        if not updated:
            raise HTTPException(status_code=404, detail="Report not found")
        print(f"Comment added to report {report_id} by {comment_dict['author']}")
        return normalize_report(updated)
    except HTTPException as e:
        raise e
    except Exception as e:
        print(f"Error adding comment: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error adding comment: {str(e)}")


@router.delete("/reports/{report_id}")
async def delete_report(report_id: str, store=Depends(get_report_store)):
    try:
        if not await store.delete_report(report_id):
            print(f"Report not found: {report_id}")
            raise HTTPException(status_code=404, detail="Report not found")
        print(f"Report {report_id} deleted")
        return {"message": f"Report {report_id} deleted successfully"}
    except HTTPException as e:
        raise e
    except Exception as e:
        print(f"Error deleting report: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error deleting report: {str(e)}")
