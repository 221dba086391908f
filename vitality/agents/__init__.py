"""
Vitality Agents

Async agents on top of the scoring engine:

- HealthSummaryAgent: score, trends, monthly average, insights and the
  assistant context text
- HealthAssistantAgent: question answering through a chat-completions
  backend with a rule-based fallback

Agents receive their data store and settings in the constructor and do
not call each other.
"""

from vitality.agents.base import (
    AgentError,
    BaseHealthAgent,
    AgentInput,
    AgentOutput,
    AgentExecutionError,
    AgentValidationError,
)
from vitality.agents.health_summary import (
    ActivityLevel,
    HealthContext,
    HealthSummaryAgent,
    HealthSummaryInput,
    HealthSummaryOutput,
    format_health_context,
)
from vitality.agents.assistant import (
    AssistantInput,
    AssistantNotConfiguredError,
    AssistantOutput,
    HealthAssistantAgent,
)

__all__ = [
    "AgentError",
    "BaseHealthAgent",
    "AgentInput",
    "AgentOutput",
    "AgentExecutionError",
    "AgentValidationError",
    "ActivityLevel",
    "HealthContext",
    "HealthSummaryAgent",
    "HealthSummaryInput",
    "HealthSummaryOutput",
    "format_health_context",
    "AssistantInput",
    "AssistantNotConfiguredError",
    "AssistantOutput",
    "HealthAssistantAgent",
]
