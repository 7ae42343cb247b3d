"""Language-model capability used by the relevance classifier and plan generator."""

import logging
from typing import Protocol

from chartgen.config.settings import Settings
from chartgen.infrastructure.llm.executor import run_single_agent
from chartgen.infrastructure.llm.factory import (
    azure_agent_client,
    create_anthropic_agent,
    get_shared_credential,
    is_anthropic_model,
)

logger = logging.getLogger(__name__)


class LanguageModel(Protocol):
    """Given system instructions and user text, return free-form text."""

    async def complete(
        self,
        system_instructions: str,
        user_text: str,
        *,
        model: str,
        temperature: float,
        max_output_tokens: int,
        name: str = "ChartAgent",
    ) -> str: ...


class AgentLanguageModel:
    """LanguageModel backed by Agent Framework; Claude models go to Anthropic, others to Azure AI."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def complete(
        self,
        system_instructions: str,
        user_text: str,
        *,
        model: str,
        temperature: float,
        max_output_tokens: int,
        name: str = "ChartAgent",
    ) -> str:
        logger.info("Running agent '%s' with model: %s", name, model)

        if is_anthropic_model(model):
            agent = create_anthropic_agent(
                settings=self.settings,
                name=name,
                instructions=system_instructions,
                model=model,
                max_tokens=max_output_tokens,
                temperature=temperature,
            )
            return await run_single_agent(agent, user_text)

        credential = get_shared_credential()
        async with azure_agent_client(self.settings, model, credential) as client:
            agent = client.create_agent(
                name=name,
                instructions=system_instructions,
                max_tokens=max_output_tokens,
                temperature=temperature,
            )
            return await run_single_agent(agent, user_text)
