"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from chartgen.api.routers.chart import router as chart_router

api_router = APIRouter()

api_router.include_router(chart_router, tags=["chart"])
