"""Agent factory helpers.

Agent Framework and Azure identity are imported lazily so the service (and its
tests) can load without touching the provider SDKs until an agent is built.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from chartgen.config.settings import Settings

logger = logging.getLogger(__name__)

_shared_credential: Any | None = None


def get_shared_credential() -> Any:
    """
    Get or create a shared DefaultAzureCredential instance.

    Returns:
        Shared azure.identity.aio.DefaultAzureCredential instance
    """
    global _shared_credential
    if _shared_credential is None:
        from azure.identity.aio import DefaultAzureCredential

        _shared_credential = DefaultAzureCredential()
    return _shared_credential


async def close_shared_credential() -> None:
    """Close the shared credential instance on application shutdown."""
    global _shared_credential
    if _shared_credential is not None:
        await _shared_credential.close()
        _shared_credential = None


def is_anthropic_model(model: str) -> bool:
    """Check if model is Anthropic (Claude)."""
    return "claude" in model.lower()


@asynccontextmanager
async def azure_agent_client(
    settings: Settings,
    model: str,
    credential: Any,
) -> AsyncIterator[Any]:
    """
    Azure AI (Foundry) agent client as context manager.

    The `model` argument must be the deployment name configured in your project.
    """
    from agent_framework_azure_ai import AzureAIAgentClient

    async with AzureAIAgentClient(
        project_endpoint=settings.azure_ai_project_endpoint,
        model_deployment_name=model,
        async_credential=credential,
    ) as client:
        yield client


def create_anthropic_agent(
    settings: Settings,
    name: str,
    instructions: str,
    model: str,
    max_tokens: int,
    temperature: float,
) -> Any:
    """
    Create an Anthropic (Claude) agent without tools.

    Usage:
        agent = create_anthropic_agent(settings, "PlanGenerator", prompt, model, 1024, 0.1)
        response = await run_single_agent(agent, user_text)
    """
    from agent_framework.anthropic import AnthropicClient

    logger.debug("Creating Anthropic agent '%s' with model: %s", name, model)

    client = AnthropicClient(
        model_id=model,
        api_key=settings.anthropic_api_key,
    )
    return client.create_agent(
        name=name,
        instructions=instructions,
        max_tokens=max_tokens,
        temperature=temperature,
    )
