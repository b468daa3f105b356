from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from railway_defects.models.report import DefectReport


class StatusCounts(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    pending: int = 0
    in_progress: int = 0
    resolved: int = 0


class SeverityDistribution(BaseModel):
    low: int = 0
    medium: int = 0
    high: int = 0
    critical: int = 0
    total: int = 0


class DefectTypeShare(BaseModel):
    type: str
    count: int
    percentage: str  # one decimal, e.g. "33.3"


class DashboardSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_counts: StatusCounts = Field(default_factory=StatusCounts)
    severity: SeverityDistribution = Field(default_factory=SeverityDistribution)
    defect_types: List[DefectTypeShare] = Field(default_factory=list)
    resolved_this_month: int = 0
    recent_activity: List[DefectReport] = Field(default_factory=list)
    active_team_count: int = 0
