"""System prompts for the chart pipeline agents."""

from chartgen.config.prompts.plan import build_plan_system_prompt, build_plan_user_input
from chartgen.config.prompts.relevance import (
    build_relevance_system_prompt,
    build_relevance_user_input,
)

__all__ = [
    "build_plan_system_prompt",
    "build_plan_user_input",
    "build_relevance_system_prompt",
    "build_relevance_user_input",
]
