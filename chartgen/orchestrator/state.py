"""Pipeline state model."""

from dataclasses import dataclass, field
from typing import Any

from chartgen.config.constants import ChartKind, FailureKind, PipelineStep
from chartgen.infrastructure.auth.identity import CallerIdentity
from chartgen.services.relevance.models import RelevanceVerdict
from chartgen.services.sql.models import QueryPlan
from chartgen.services.viz.models import TransformResult


@dataclass
class PipelineState:
    """State object passed through the pipeline for one request."""

    # Input
    prompt: Any
    identity: CallerIdentity | None = None
    chart_override: ChartKind | None = None

    step: PipelineStep = PipelineStep.RECEIVED
    visited: list[PipelineStep] = field(default_factory=lambda: [PipelineStep.RECEIVED])

    # Relevance
    verdict: RelevanceVerdict | None = None

    # Planning / validation
    raw_plan: dict[str, Any] | None = None
    plan: QueryPlan | None = None

    # Execution / transform
    rows: list[Any] | None = None
    result: TransformResult | None = None

    # Response
    payload: dict[str, Any] | None = None

    # Terminal failure
    failure: FailureKind | None = None
    failure_message: str | None = None

    def advance(self, step: PipelineStep) -> None:
        self.step = step
        self.visited.append(step)


@dataclass(frozen=True)
class PipelineFailure:
    """Terminal failure with its caller-facing message."""

    kind: FailureKind
    message: str


@dataclass(frozen=True)
class PipelineOutcome:
    """Either a success payload or a failure, never both."""

    payload: dict[str, Any] | None = None
    failure: PipelineFailure | None = None
    steps: tuple[PipelineStep, ...] = ()

    @property
    def ok(self) -> bool:
        return self.failure is None
