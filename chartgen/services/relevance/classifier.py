"""Relevance classifier service."""

import asyncio
import logging

from chartgen.config.prompts import build_relevance_system_prompt, build_relevance_user_input
from chartgen.config.settings import Settings
from chartgen.infrastructure.llm.client import LanguageModel
from chartgen.services.relevance.models import RelevanceVerdict
from chartgen.utils.json_parser import JSONParser

logger = logging.getLogger(__name__)


class RelevanceClassifier:
    """Decides whether a prompt is about the municipal complaints dataset.

    Fails open: an unreachable model, a timeout or an unparseable answer all
    count as relevant. The SQL safety gate downstream still applies.
    """

    def __init__(self, settings: Settings, llm: LanguageModel):
        """Initialize relevance classifier."""
        self.settings = settings
        self.llm = llm

    async def classify(self, prompt: str) -> RelevanceVerdict:
        """
        Classify a user prompt.

        Args:
            prompt: Raw, untrusted user text

        Returns:
            RelevanceVerdict; relevant=True whenever the answer cannot be trusted
        """
        try:
            response = await asyncio.wait_for(
                self.llm.complete(
                    build_relevance_system_prompt(),
                    build_relevance_user_input(prompt),
                    model=self.settings.relevance_agent_model,
                    temperature=self.settings.relevance_temperature,
                    max_output_tokens=self.settings.relevance_max_tokens,
                    name="RelevanceClassifier",
                ),
                timeout=self.settings.relevance_timeout,
            )
        except asyncio.TimeoutError:
            logger.error(
                "Relevance classification timed out after %.1fs, defaulting to relevant",
                self.settings.relevance_timeout,
            )
            return RelevanceVerdict(relevant=True)
        except Exception as e:
            logger.error(f"Relevance classification error: {e}", exc_info=True)
            return RelevanceVerdict(relevant=True)

        result = JSONParser.extract_json(response)
        if result is None:
            logger.warning("Relevance answer was not JSON, defaulting to relevant")
            return RelevanceVerdict(relevant=True)

        # Only an explicit boolean false rejects the prompt.
        if result.get("relevant") is not False:
            return RelevanceVerdict(relevant=True)

        reason = result.get("reason")
        if not isinstance(reason, str) or not reason.strip():
            reason = None
        logger.info("Prompt classified as not relevant: %s", reason)
        return RelevanceVerdict(relevant=False, reason=reason)
