"""API router composition.

REST endpoints live under `/api/*`; everything else falls through to the
static front-end handler registered in `secreport.main`.
"""

from fastapi import APIRouter

from secreport.api.routes.reports import router as reports_router


api_router = APIRouter()

api_router.include_router(reports_router, tags=["reports"])
