"""Query plan generator service."""

import asyncio
import logging
from typing import Any

from chartgen.config.prompts import build_plan_system_prompt, build_plan_user_input
from chartgen.config.settings import Settings
from chartgen.infrastructure.llm.client import LanguageModel
from chartgen.utils.json_parser import JSONParser

logger = logging.getLogger(__name__)


class PlanGenerator:
    """Asks the language model for a query plan (SQL + chart metadata)."""

    def __init__(self, settings: Settings, llm: LanguageModel):
        """Initialize plan generator.

        Args:
            settings: Application settings
            llm: Language-model capability
        """
        self.settings = settings
        self.llm = llm
        logger.info(f"PlanGenerator initialized with model: {settings.plan_agent_model}")

    async def generate(self, prompt: str) -> dict[str, Any] | None:
        """
        Generate a candidate plan from natural language.

        One shot per request: no retries and no rephrasing. The candidate is
        NOT validated here; PlanNormalizer owns that.

        Args:
            prompt: User's natural language question

        Returns:
            The raw plan object with a string ``sql`` field, or None when the
            model times out or answers without a usable plan

        Raises:
            Exception: transport or provider failures propagate unchanged
        """
        try:
            raw_result = await asyncio.wait_for(
                self.llm.complete(
                    build_plan_system_prompt(),
                    build_plan_user_input(prompt),
                    model=self.settings.plan_agent_model,
                    temperature=self.settings.plan_temperature,
                    max_output_tokens=self.settings.plan_max_tokens,
                    name="PlanGenerator",
                ),
                timeout=self.settings.plan_timeout,
            )
        except asyncio.TimeoutError:
            logger.error("Plan generation timed out after %.1fs", self.settings.plan_timeout)
            return None

        plan_json = JSONParser.extract_json(raw_result)
        if plan_json is None:
            logger.error(
                f"Could not extract JSON from plan agent response. "
                f"Raw response (first 500 chars): {str(raw_result)[:500]}"
            )
            return None

        sql = plan_json.get("sql")
        if not isinstance(sql, str) or not sql:
            logger.error("Plan agent response has no usable 'sql' field")
            return None

        return plan_json
