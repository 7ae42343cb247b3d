"""Main pipeline orchestrator."""

import logging
from collections.abc import AsyncIterator
from typing import Any

from chartgen.api.response import build_chart_payload
from chartgen.config.constants import (
    FAILURE_STATUS_CODES,
    ChartKind,
    FailureKind,
    FailureMessage,
    PipelineStatus,
    PipelineStep,
)
from chartgen.config.settings import Settings
from chartgen.infrastructure.auth.identity import CallerIdentity
from chartgen.infrastructure.database.connection import SupabaseRestClient
from chartgen.infrastructure.llm.client import AgentLanguageModel, LanguageModel
from chartgen.infrastructure.logging.logger import StructuredLogger
from chartgen.orchestrator.state import PipelineFailure, PipelineOutcome, PipelineState
from chartgen.orchestrator.step_timer import timed_step
from chartgen.services.relevance.classifier import RelevanceClassifier
from chartgen.services.sql.executor import SQLExecutionError, SQLExecutor
from chartgen.services.sql.generator import PlanGenerator
from chartgen.services.sql.normalizer import PlanNormalizer
from chartgen.services.viz.transformer import transform

logger = logging.getLogger(__name__)


class _Halt(Exception):
    """Internal signal: the pipeline reached a terminal failure."""


class ChartPipeline:
    """Orchestrates prompt -> relevance -> plan -> validation -> execution -> chart.

    Stages run strictly one after another; the only state is per request, so one
    instance may serve concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        classifier: RelevanceClassifier,
        generator: PlanGenerator,
        executor: SQLExecutor,
        normalizer: PlanNormalizer | None = None,
        rest: SupabaseRestClient | None = None,
    ):
        """Initialize orchestrator with settings and its stages."""
        self.settings = settings
        self.classifier = classifier
        self.generator = generator
        self.executor = executor
        self.normalizer = normalizer or PlanNormalizer()
        self._rest = rest
        self.step_logger = StructuredLogger(__name__)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        llm: LanguageModel | None = None,
        rest: SupabaseRestClient | None = None,
    ) -> "ChartPipeline":
        """Build the pipeline with the production collaborators.

        A REST client passed in stays owned by the caller; one created here is
        closed with the pipeline.
        """
        llm = llm or AgentLanguageModel(settings)
        owned_rest = SupabaseRestClient(settings) if rest is None else None
        return cls(
            settings,
            classifier=RelevanceClassifier(settings, llm),
            generator=PlanGenerator(settings, llm),
            executor=SQLExecutor(settings, rest or owned_rest),
            rest=owned_rest,
        )

    async def __aenter__(self) -> "ChartPipeline":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client this pipeline created, if any."""
        if self._rest is not None:
            try:
                await self._rest.close()
                logger.info("Pipeline resources closed")
            except Exception as e:
                logger.error(f"Error closing pipeline resources: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    async def process(
        self,
        prompt: Any,
        identity: CallerIdentity | None,
        chart_type: Any = None,
    ) -> PipelineOutcome:
        """Run the whole pipeline and return the final outcome."""
        state = self._new_state(prompt, identity, chart_type)
        async for _ in self._run(state):
            pass
        return self._outcome(state)

    async def process_stream(
        self,
        prompt: Any,
        identity: CallerIdentity | None,
        chart_type: Any = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Run the pipeline, yielding one event per completed step and a final event."""
        state = self._new_state(prompt, identity, chart_type)
        async for event in self._run(state):
            yield event

        outcome = self._outcome(state)
        if outcome.failure is not None:
            yield {
                "step": "error",
                "kind": outcome.failure.kind.value,
                "error": outcome.failure.message,
                "status": FAILURE_STATUS_CODES[outcome.failure.kind],
            }
        else:
            yield {"step": "complete", "result": outcome.payload}

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _new_state(self, prompt: Any, identity: CallerIdentity | None, chart_type: Any) -> PipelineState:
        override = ChartKind.resolve(chart_type)
        if chart_type is not None and override is None:
            logger.warning("Ignoring unknown chart type override: %r", chart_type)
        return PipelineState(prompt=prompt, identity=identity, chart_override=override)

    def _fail(self, state: PipelineState, kind: FailureKind, message: str) -> _Halt:
        state.failure = kind
        state.failure_message = message
        logger.info("Pipeline failed at %s: %s", state.step.value, kind.value)
        return _Halt(kind.value)

    def _outcome(self, state: PipelineState) -> PipelineOutcome:
        if state.failure is not None:
            return PipelineOutcome(
                failure=PipelineFailure(kind=state.failure, message=state.failure_message or ""),
                steps=tuple(state.visited),
            )
        return PipelineOutcome(payload=state.payload, steps=tuple(state.visited))

    async def _run(self, state: PipelineState) -> AsyncIterator[dict[str, Any]]:
        try:
            self._check_request(state)
            yield self._event(state, PipelineStep.AUTHORIZATION)

            await self._step_relevance(state)
            yield self._event(state, PipelineStep.RELEVANCE)

            await self._step_planning(state)
            yield self._event(state, PipelineStep.PLANNING)

            self._step_validation(state)
            yield self._event(state, PipelineStep.VALIDATION)

            await self._step_execution(state)
            yield self._event(state, PipelineStep.EXECUTION)

            await self._step_transform(state)
            yield self._event(state, PipelineStep.TRANSFORM)

            state.advance(PipelineStep.RESPONSE)
        except _Halt:
            return
        except Exception as e:
            logger.error("Unexpected pipeline error at %s: %s", state.step.value, e, exc_info=True)
            self._fail(state, FailureKind.UNEXPECTED_ERROR, FailureMessage.UNEXPECTED_ERROR.value)

    def _event(self, state: PipelineState, step: PipelineStep) -> dict[str, Any]:
        state.advance(step)
        return {"step": step.value, "status": PipelineStatus.COMPLETED.value}

    def _check_request(self, state: PipelineState) -> None:
        """Shape and authorization checks; no external call happens before these pass."""
        if not isinstance(state.prompt, str) or not state.prompt:
            raise self._fail(state, FailureKind.BAD_REQUEST, FailureMessage.BAD_REQUEST.value)

        if state.identity is None:
            raise self._fail(state, FailureKind.UNAUTHORIZED, FailureMessage.UNAUTHORIZED.value)

        if state.identity.role not in self.settings.allowed_roles:
            logger.info(
                "Caller %s with role %r is not allowed to generate charts",
                state.identity.subject,
                state.identity.role,
            )
            raise self._fail(state, FailureKind.FORBIDDEN, FailureMessage.FORBIDDEN.value)

    async def _step_relevance(self, state: PipelineState) -> None:
        async with timed_step(PipelineStep.RELEVANCE, self.step_logger) as step:
            state.verdict = await self.classifier.classify(state.prompt)
            step.set_result(relevant=state.verdict.relevant, reason=state.verdict.reason)

        if not state.verdict.relevant:
            message = state.verdict.reason or FailureMessage.OUT_OF_DOMAIN.value
            raise self._fail(state, FailureKind.OUT_OF_DOMAIN, message)

    async def _step_planning(self, state: PipelineState) -> None:
        async with timed_step(PipelineStep.PLANNING, self.step_logger) as step:
            state.raw_plan = await self.generator.generate(state.prompt)
            step.set_result(has_plan=state.raw_plan is not None)

        if state.raw_plan is None:
            raise self._fail(state, FailureKind.PLANNING_FAILED, FailureMessage.PLANNING_FAILED.value)

    def _step_validation(self, state: PipelineState) -> None:
        state.plan = self.normalizer.normalize(state.raw_plan)
        self.step_logger.log_step(
            PipelineStep.VALIDATION.value,
            {"accepted": state.plan is not None},
        )
        if state.plan is None:
            raise self._fail(state, FailureKind.UNSAFE_SQL, FailureMessage.UNSAFE_SQL.value)

    async def _step_execution(self, state: PipelineState) -> None:
        if state.plan is None or state.identity is None:
            raise RuntimeError("execution reached without a validated plan and caller")

        try:
            async with timed_step(PipelineStep.EXECUTION, self.step_logger) as step:
                state.rows = await self.executor.execute(state.plan, state.identity)
                step.set_result(rows=len(state.rows))
        except SQLExecutionError as e:
            raise self._fail(
                state,
                FailureKind.EXECUTION_FAILED,
                FailureMessage.EXECUTION_FAILED.value.format(message=e.message),
            ) from e

    async def _step_transform(self, state: PipelineState) -> None:
        if state.plan is None:
            raise RuntimeError("transform reached without a validated plan")

        async with timed_step(PipelineStep.TRANSFORM, self.step_logger) as step:
            state.result = transform(state.rows or [], state.plan, self.settings.preview_row_limit)
            step.set_result(total_records=state.result.total_records)

        state.payload = build_chart_payload(state.plan, state.result, state.chart_override)
