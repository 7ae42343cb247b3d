"""Chart generation and health endpoints."""

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse

from chartgen.api.dependencies import identity_dep, rest_dep, settings_dep
from chartgen.api.models import ChartRequest, HealthResponse
from chartgen.api.response import error_response, json_response
from chartgen.config.constants import FailureKind, FailureMessage
from chartgen.orchestrator.pipeline import ChartPipeline
from chartgen.orchestrator.state import PipelineFailure

logger = logging.getLogger(__name__)

router = APIRouter()

_UNEXPECTED = PipelineFailure(FailureKind.UNEXPECTED_ERROR, FailureMessage.UNEXPECTED_ERROR.value)


async def _read_chart_request(request: Request) -> ChartRequest:
    """Parse the body leniently; anything that is not a JSON object becomes an empty request."""
    try:
        body: Any = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return ChartRequest()
    return ChartRequest.model_validate(body)


@router.post("/generate-chart")
async def generate_chart(
    request: Request,
    settings: settings_dep,
    rest: rest_dep,
    identity: identity_dep,
) -> JSONResponse:
    """Turn a natural language prompt into chart data backed by a read-only query."""
    chart_request = await _read_chart_request(request)
    try:
        async with ChartPipeline.from_settings(settings, rest=rest) as pipeline:
            outcome = await pipeline.process(
                chart_request.prompt, identity, chart_request.chartType
            )
    except Exception as e:
        logger.error("Error processing chart request: %s", e, exc_info=True)
        return error_response(_UNEXPECTED)

    if outcome.failure is not None:
        return error_response(outcome.failure)
    return json_response(outcome.payload or {})


@router.post("/generate-chart/stream", response_class=StreamingResponse)
async def generate_chart_stream(
    request: Request,
    settings: settings_dep,
    identity: identity_dep,
) -> StreamingResponse:
    """Stream pipeline progress as Server-Sent Events.

    The pipeline opens its own REST client here: the body outlives the
    request-scoped dependencies.
    """
    chart_request = await _read_chart_request(request)

    async def generate() -> AsyncIterator[str]:
        try:
            async with ChartPipeline.from_settings(settings) as pipeline:
                async for event in pipeline.process_stream(
                    chart_request.prompt, identity, chart_request.chartType
                ):
                    yield f"data: {json.dumps(event, ensure_ascii=False)}\n\n"
            logger.info("Stream completed")
        except Exception as e:
            logger.error("Error in streaming: %s", e, exc_info=True)
            error = {"step": "error", "kind": _UNEXPECTED.kind.value, "error": _UNEXPECTED.message}
            yield f"data: {json.dumps(error, ensure_ascii=False)}\n\n"

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.get("/health", response_model=HealthResponse)
async def health(settings: settings_dep) -> HealthResponse:
    """Health check."""
    return HealthResponse(status="healthy", version=settings.app_version)
