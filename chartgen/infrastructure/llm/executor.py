"""
Agent executor for running agents in isolation.
"""
import logging
from typing import Any

logger = logging.getLogger(__name__)


async def run_single_agent(agent: Any, input_text: str) -> str:
    """
    Run an agent once and return its accumulated text.

    No retry: a failed call propagates to the caller, which owns the
    fail-open / fail-closed decision for its stage.
    """
    response = await agent.run(input_text)
    text = getattr(response, "text", None)
    if not text:
        logger.warning("run_single_agent: no text received from agent")
        return ""
    return str(text)
