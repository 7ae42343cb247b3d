"""Standardized response builders for the chart endpoint."""

from typing import Any

from fastapi.responses import JSONResponse

from chartgen.api.models import ChartResponse, ErrorResponse
from chartgen.config.constants import FAILURE_STATUS_CODES, ChartKind
from chartgen.orchestrator.state import PipelineFailure
from chartgen.services.sql.models import QueryPlan
from chartgen.services.viz.models import TransformResult


def build_chart_payload(
    plan: QueryPlan,
    result: TransformResult,
    chart_override: ChartKind | None = None,
) -> dict[str, Any]:
    """Build a ChartResponse-compatible dict; ``dataPreview`` is dropped when empty."""
    chart_kind = chart_override or plan.chart_kind
    response = ChartResponse(
        chartType=chart_kind.value,
        title=plan.title,
        totalRecords=result.total_records,
        data=result.series,
        sql=plan.sql,
        dataPreview=result.preview or None,
    )
    payload = response.model_dump(mode="json")
    if payload.get("dataPreview") is None:
        payload.pop("dataPreview", None)
    return payload


def json_response(payload: dict[str, Any], status_code: int = 200) -> JSONResponse:
    """JSON response; access headers are added by FixedCORSMiddleware."""
    return JSONResponse(content=payload, status_code=status_code)


def error_response(failure: PipelineFailure) -> JSONResponse:
    """Map a PipelineFailure to its HTTP status and ``{error}`` body."""
    body = ErrorResponse(error=failure.message).model_dump()
    return json_response(body, status_code=FAILURE_STATUS_CODES[failure.kind])
