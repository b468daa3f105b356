from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ReportStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"


class Comment(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    author: str = "Anonymous"
    text: str = ""
    timestamp: Optional[datetime] = None


class DefectReport(BaseModel):
    """Canonical defect report.

    Records coming from the store or from the API are folded into this shape
    by ``railway_defects.services.normalize.normalize_report``; every field has
    a default so partial records never fail validation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    type: str = "Unknown"
    risk_level: RiskLevel = RiskLevel.MEDIUM
    status: ReportStatus = ReportStatus.PENDING
    location: Optional[str] = None
    report_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    due_date: Optional[datetime] = None
    assigned_to: str = "Unassigned"
    reported_by: Optional[str] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    comments: List[Comment] = Field(default_factory=list)
