"""Request/Response models for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from chartgen.services.viz.models import ChartRecord


class ChartRequest(BaseModel):
    """Request model for the chart endpoint.

    Fields are untyped. A missing or non-string prompt reaches the pipeline,
    which reports it as a bad request; an unknown chart type is ignored there.
    """

    prompt: Any = Field(None, description="Natural language question")
    chartType: Any = Field(None, description="Optional chart kind override")
    previewOnly: Any = Field(None, description="Accepted, currently unused")


class ChartResponse(BaseModel):
    """Successful chart response."""

    chartType: str = Field(..., description="bar, line, pie or doughnut")
    title: str = Field(..., description="Chart title")
    totalRecords: int = Field(..., description="Number of chart points")
    data: list[ChartRecord] = Field(..., description="Chart series")
    sql: str = Field(..., description="Validated SQL that produced the data")
    dataPreview: list[dict[str, Any]] | None = Field(
        None, description="First rows of the raw result, omitted when empty"
    )


class ErrorResponse(BaseModel):
    """Failure response."""

    error: str = Field(..., description="Caller-facing error message")


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
