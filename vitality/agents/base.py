"""
Agent base for the vitality agents.

An agent validates a plain dict against its pydantic input model, runs
``_execute`` and re-validates what it produced. Agents never call each
other; their data store and settings are passed in by the caller.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vitality.config import Settings
from vitality.storage_providers.base import HealthDataStore


# =============================================================================
# ERRORS
# =============================================================================

class AgentError(Exception):
    """Common root for agent failures; ``agent_id`` names the failing agent."""

    def __init__(self, agent_id: str, message: str):
        self.agent_id = agent_id
        super().__init__(f"[{agent_id}] {message}")


class AgentExecutionError(AgentError):
    """The agent raised while producing its output."""

    def __init__(self, agent_id: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(agent_id, message)
        self.details = details or {}


class AgentValidationError(AgentError):
    """Input or output did not match the agent's schema."""

    def __init__(self, agent_id: str, validation_type: str, errors: List[str]):
        super().__init__(agent_id, f"{validation_type} validation failed: {'; '.join(errors)}")
        self.validation_type = validation_type  # "input" | "output"
        self.errors = errors


def _format_errors(exc: ValidationError) -> List[str]:
    return [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]


# =============================================================================
# SCHEMAS
# =============================================================================

class AgentInput(BaseModel):
    model_config = ConfigDict(extra="forbid")


class AgentOutput(BaseModel):
    """Fields every agent output carries; ``run()`` fills them in."""
    model_config = ConfigDict(extra="forbid")

    agent_id: str
    execution_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    execution_time_ms: Optional[float] = None


InputT = TypeVar("InputT", bound=AgentInput)
OutputT = TypeVar("OutputT", bound=AgentOutput)


# =============================================================================
# BASE AGENT
# =============================================================================

class BaseHealthAgent(ABC, Generic[InputT, OutputT]):
    """
    Typed async agent.

    Subclasses set ``agent_id`` and ``purpose``, name their pydantic models
    through ``input_type`` / ``output_type`` and implement ``_execute``.
    """

    agent_id: str
    purpose: str

    def __init__(self, store: HealthDataStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or Settings()
        self.logger = logging.getLogger(f"agent.{self.agent_id}")

    @property
    @abstractmethod
    def input_type(self) -> type[InputT]:
        ...

    @property
    @abstractmethod
    def output_type(self) -> type[OutputT]:
        ...

    @abstractmethod
    async def _execute(self, validated_input: InputT) -> OutputT:
        ...

    def validate_input(self, input_data: Dict[str, Any]) -> InputT:
        try:
            return self.input_type.model_validate(input_data)
        except ValidationError as exc:
            raise AgentValidationError(self.agent_id, "input", _format_errors(exc)) from exc

    def validate_output(self, output: OutputT) -> OutputT:
        try:
            return self.output_type.model_validate(output.model_dump())
        except ValidationError as exc:
            raise AgentValidationError(self.agent_id, "output", _format_errors(exc)) from exc

    async def run(self, input_data: Dict[str, Any]) -> OutputT:
        """Validate ``input_data``, execute and return the validated output.

        Raises:
            AgentValidationError: input or output failed schema validation
            AgentExecutionError: anything else went wrong inside the agent
        """
        execution_id = str(uuid4())
        started = time.perf_counter()
        self.logger.info("Run %s started", execution_id)

        try:
            validated_input = self.validate_input(input_data)
            output = await self._execute(validated_input)
            output = self._stamp(output, execution_id, started)
            result = self.validate_output(output)
        except AgentError:
            raise
        except Exception as exc:
            self.logger.error("Run %s failed: %s", execution_id, exc, exc_info=True)
            raise AgentExecutionError(self.agent_id, str(exc), {"execution_id": execution_id}) from exc

        self.logger.info("Run %s finished in %.2fms", execution_id, result.execution_time_ms)
        return result

    def _stamp(self, output: OutputT, execution_id: str, started: float) -> OutputT:
        output.agent_id = self.agent_id
        output.execution_id = execution_id
        output.timestamp = datetime.now(timezone.utc)
        output.execution_time_ms = (time.perf_counter() - started) * 1000
        return output

    def __repr__(self) -> str:
        return f"<{type(self).__name__} agent_id={self.agent_id!r}>"
