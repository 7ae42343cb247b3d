"""Async context manager for timing and logging pipeline steps."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from chartgen.config.constants import PipelineStep, log_pipeline_step
from chartgen.infrastructure.logging.logger import StructuredLogger


class StepContext:
    """Mutable context for a timed pipeline step."""

    def __init__(self) -> None:
        self.summary: dict[str, Any] = {}

    def set_result(self, **summary: Any) -> None:
        self.summary.update(summary)


@asynccontextmanager
async def timed_step(
    step: PipelineStep,
    logger: StructuredLogger,
) -> AsyncGenerator[StepContext, None]:
    """Time a pipeline step and log its summary (or its error)."""
    log_pipeline_step(step)
    ctx = StepContext()
    start = time.perf_counter()
    try:
        yield ctx
    except Exception as e:
        logger.log_error(step.value, e, context=ctx.summary or None)
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.log_step(step.value, ctx.summary, duration_ms=elapsed_ms)
