"""
Shared API dependencies.

The store and service are built once in the application lifespan and kept on
``app.state``; routes receive them through FastAPI ``Depends`` so tests can
swap them with ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Request

from secreport.services.report_service import ReportService


def get_report_service(request: Request) -> ReportService:
    return request.app.state.report_service


def request_base_url(request: Request) -> str:
    """``scheme://host`` of the incoming request, as the client addressed it."""
    host = request.headers.get("host") or request.url.netloc
    return f"{request.url.scheme}://{host}"
