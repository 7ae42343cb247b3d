"""LLM infrastructure module."""

from chartgen.infrastructure.llm.client import AgentLanguageModel, LanguageModel
from chartgen.infrastructure.llm.executor import run_single_agent
from chartgen.infrastructure.llm.factory import (
    azure_agent_client,
    close_shared_credential,
    create_anthropic_agent,
    get_shared_credential,
    is_anthropic_model,
)

__all__ = [
    "AgentLanguageModel",
    "LanguageModel",
    "run_single_agent",
    "is_anthropic_model",
    "azure_agent_client",
    "create_anthropic_agent",
    "get_shared_credential",
    "close_shared_credential",
]
