"""Report models: store rows, service results and API envelopes."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field


class StoredReport(BaseModel):
    """Raw row as held by the store; ``data`` is never interpreted there."""

    id: str
    data: str
    created_at: str


class ReportSummary(BaseModel):
    id: str
    created_at: str = Field(serialization_alias="createdAt")


class CreatedReport(BaseModel):
    id: str
    url: str


class Report(BaseModel):
    id: str
    document: Any
    created_at: str


# ── API envelopes ─────────────────────────────────────────────────────────────


class ReportPayload(BaseModel):
    id: str
    data: Any
    created_at: str = Field(serialization_alias="createdAt")


class CreateReportResponse(BaseModel):
    success: bool = True
    report_id: str = Field(serialization_alias="reportId")
    report_url: str = Field(serialization_alias="reportUrl")


class FetchReportResponse(BaseModel):
    success: bool = True
    report: ReportPayload


class ListReportsResponse(BaseModel):
    success: bool = True
    count: int
    reports: List[ReportSummary]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
