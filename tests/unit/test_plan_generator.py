"""Tests for the plan generator."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from chartgen.services.sql.generator import PlanGenerator

PLAN_TEXT = (
    'Here you go:\n{"sql": "SELECT status AS name, COUNT(*) AS value FROM status_logs GROUP BY status",'
    ' "chartType": "pie", "title": "Status Distribution"}'
)


@pytest.mark.asyncio
async def test_generate_returns_raw_plan(settings):
    llm = AsyncMock()
    llm.complete.return_value = PLAN_TEXT

    plan = await PlanGenerator(settings, llm).generate("status breakdown")

    assert plan["chartType"] == "pie"
    assert plan["sql"].startswith("SELECT status")
    llm.complete.assert_awaited_once()
    assert llm.complete.call_args.kwargs["model"] == settings.plan_agent_model
    assert llm.complete.call_args.kwargs["max_output_tokens"] == settings.plan_max_tokens


@pytest.mark.asyncio
async def test_generate_does_not_validate(settings):
    llm = AsyncMock()
    llm.complete.return_value = '{"sql": "DROP TABLE complaints"}'

    plan = await PlanGenerator(settings, llm).generate("drop everything")

    assert plan == {"sql": "DROP TABLE complaints"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "answer",
    [
        "no json here",
        '{"chartType": "bar"}',
        '{"sql": ""}',
        '{"sql": ["SELECT 1"]}',
        "[1, 2, 3]",
        "",
    ],
)
async def test_generate_unusable_answer_returns_none(settings, answer):
    llm = AsyncMock()
    llm.complete.return_value = answer
    assert await PlanGenerator(settings, llm).generate("x") is None


@pytest.mark.asyncio
async def test_generate_model_error_propagates(settings):
    llm = AsyncMock()
    llm.complete.side_effect = ConnectionError("unreachable")
    with pytest.raises(ConnectionError):
        await PlanGenerator(settings, llm).generate("x")
    llm.complete.assert_awaited_once()


@pytest.mark.asyncio
async def test_generate_timeout_returns_none(settings):
    async def slow(*args, **kwargs):
        await asyncio.sleep(1)
        return PLAN_TEXT

    llm = AsyncMock()
    llm.complete.side_effect = slow
    fast_settings = settings.model_copy(update={"plan_timeout": 0.01})

    assert await PlanGenerator(fast_settings, llm).generate("x") is None
