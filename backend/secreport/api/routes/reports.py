"""Report create, fetch and listing routes."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from secreport.api import dependencies as deps
from secreport.core.errors import ReportError, ReportNotFound
from secreport.models.report_model import (
    CreateReportResponse,
    ErrorResponse,
    FetchReportResponse,
    ListReportsResponse,
    ReportPayload,
)
from secreport.services.report_service import ReportService

logger = logging.getLogger(__name__)

router = APIRouter()

_ERRORS = {500: {"model": ErrorResponse}}


class ReportJSONResponse(JSONResponse):
    """JSON response with ASCII escapes, so any string a client could submit encodes."""

    def render(self, content) -> bytes:
        return json.dumps(content, ensure_ascii=True, allow_nan=False, separators=(",", ":")).encode("utf-8")


def error_response(status_code: int, message: str) -> JSONResponse:
    return ReportJSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


# ── CREATE ────────────────────────────────────────────────────────────────────


@router.post(
    "/reports",
    status_code=201,
    response_model=CreateReportResponse,
    responses={400: {"model": ErrorResponse}, **_ERRORS},
)
async def create_report(request: Request, service: ReportService = Depends(deps.get_report_service)):
    """
    Store the request body as a new report and return its shareable URL.

    The body may be any JSON value; it is stored verbatim and never validated.
    An empty body is stored as ``{}``.
    """
    raw = await request.body()
    try:
        document = json.loads(raw) if raw.strip() else {}
    except (ValueError, RecursionError):
        return error_response(400, "Invalid JSON body")

    try:
        created = service.create_report(document, deps.request_base_url(request))
    except ReportError:
        logger.exception("Error creating report")
        return error_response(500, "Failed to create report")

    body = CreateReportResponse(report_id=created.id, report_url=created.url)
    return ReportJSONResponse(status_code=201, content=body.model_dump(by_alias=True))


# ── FETCH ─────────────────────────────────────────────────────────────────────


@router.get(
    "/reports/{report_id}",
    response_model=FetchReportResponse,
    responses={404: {"model": ErrorResponse}, **_ERRORS},
)
async def fetch_report(report_id: str, service: ReportService = Depends(deps.get_report_service)):
    try:
        report = service.fetch_report(report_id)
    except ReportNotFound:
        return error_response(404, "Report not found")
    except ReportError:
        logger.exception("Error fetching report %s", report_id)
        return error_response(500, "Failed to fetch report")

    payload = ReportPayload(id=report.id, data=report.document, created_at=report.created_at)
    return ReportJSONResponse(content=FetchReportResponse(report=payload).model_dump(by_alias=True))


# ── LISTING (administrative) ──────────────────────────────────────────────────


@router.get("/reports", response_model=ListReportsResponse, responses=_ERRORS)
async def list_reports(service: ReportService = Depends(deps.get_report_service)):
    try:
        reports = service.list_reports()
    except ReportError:
        logger.exception("Error listing reports")
        return error_response(500, "Failed to list reports")

    body = ListReportsResponse(count=len(reports), reports=reports)
    return ReportJSONResponse(content=body.model_dump(by_alias=True))
