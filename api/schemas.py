from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class IssueFiltersModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    search: str = ""
    city: str = "All"
    client: str = "All"
    assigned_to: str = Field(default="All", alias="assignedTo")
    status: str = "All"
    vehicle: str = ""
    month: str = "All"


class BucketModel(BaseModel):
    open: int = 0
    closed: int = 0
    on_hold: int = Field(default=0, alias="onHold")
    total: int = 0


class IssueSummaryModel(BaseModel):
    total_issues: int = Field(alias="totalIssues")
    open_count: int = Field(alias="openCount")
    closed_count: int = Field(alias="closedCount")
    on_hold_count: int = Field(alias="onHoldCount")


class IssueAnalyticsModel(BaseModel):
    client_summary: Dict[str, BucketModel] = Field(alias="clientSummary")
    assignee_summary: Dict[str, BucketModel] = Field(alias="assigneeSummary")
    monthly_data: Dict[str, BucketModel] = Field(alias="monthlyData")


class IssueBundleModel(IssueSummaryModel, IssueAnalyticsModel):
    pass
