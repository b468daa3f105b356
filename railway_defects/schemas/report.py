from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from railway_defects.models.report import ReportStatus, RiskLevel


def _title_case(value):
    # "in progress" -> "In Progress", "HIGH" -> "High"
    if isinstance(value, str):
        return value.strip().title()
    return value


class ReportCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: str
    risk_level: RiskLevel = RiskLevel.MEDIUM
    status: ReportStatus = ReportStatus.PENDING
    location: str
    description: Optional[str] = None
    assigned_to: str = "Unassigned"
    reported_by: Optional[str] = None
    image_url: Optional[str] = None
    report_date: Optional[datetime] = None
    due_date: Optional[datetime] = None

    @field_validator("risk_level", "status", mode="before")
    @classmethod
    def normalize_enums(cls, value):
        return _title_case(value)


class ReportUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Optional[ReportStatus] = None
    risk_level: Optional[RiskLevel] = None
    assigned_to: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None

    @field_validator("risk_level", "status", mode="before")
    @classmethod
    def normalize_enums(cls, value):
        return _title_case(value)


class CommentCreate(BaseModel):
    author: Optional[str] = None
    text: str

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Comment text is required")
        return value
