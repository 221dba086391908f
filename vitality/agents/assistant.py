"""
Health Assistant Agent

Answers free-text questions about the user's health. Replies come from
the reply cache, then from the chat-completions backend, and finally from
keyword-routed rule-based answers when the backend is unavailable.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List

from pydantic import Field

from vitality.agents.base import AgentExecutionError, AgentInput, AgentOutput, BaseHealthAgent
from vitality.agents.health_summary import HealthContext, format_health_context, format_number
from vitality.openai_client import OpenAIClientError, chat_completion
from vitality.scoring.units import daily_to_weekly_minutes
from vitality.utils import round_to_int


class AssistantNotConfiguredError(AgentExecutionError):
    """Raised when a remote answer is required but no API key is configured."""


SYSTEM_PROMPT = """You are a knowledgeable and supportive health assistant for the Vitality Score app. Help users understand their health data, give evidence-based insights and practical recommendations.

Guidelines:
- Base responses on the provided health data and context
- Reference specific metrics and suggest concrete next steps
- Be encouraging while honest about areas for improvement
- Never provide a medical diagnosis; recommend a healthcare provider for serious concerns
- Keep responses conversational and easy to understand

Vitality Score levels (0-100):
- 90-100: Top Form!
- 70-89: Strong & Active
- 50-69: Solid Progress
- 30-49: On The Way
- 0-29: Time For Change"""

INSIGHTS_PROMPT = (
    "Please provide 3-4 key insights about this user's health data, focusing on their "
    "most important trends and opportunities for improvement."
)
RECOMMENDATIONS_PROMPT = (
    "Based on this user's health data and trends, please provide 3-4 specific, actionable "
    "recommendations for improving their vitality score."
)

SLEEP_KEYWORDS = ("sleep", "rem", "deep")
HEART_KEYWORDS = ("heart", "hrv", "cardiovascular")
SCORE_KEYWORDS = ("score", "vitality", "fitness")
ACTIVITY_KEYWORDS = ("training", "exercise", "activity", "steps")


# =============================================================================
# INPUT/OUTPUT SCHEMAS
# =============================================================================

class AssistantInput(AgentInput):
    """Input schema for HealthAssistantAgent."""

    user_message: str = Field(..., min_length=1, description="The user's question, verbatim")
    health_context: HealthContext = Field(..., description="Current health context")
    use_cache: bool = Field(default=True, description="Serve a fresh cached reply when available")


class AssistantOutput(AgentOutput):
    """Output schema for HealthAssistantAgent."""

    message: str
    confidence: float = Field(..., ge=0, le=1)
    sources: List[str] = Field(default_factory=list)
    usage: Dict[str, Any] = Field(default_factory=dict, description="Token usage reported by the backend")


# =============================================================================
# AGENT IMPLEMENTATION
# =============================================================================

class HealthAssistantAgent(BaseHealthAgent[AssistantInput, AssistantOutput]):
    """Conversational assistant grounded in the user's health context."""

    agent_id = "health_assistant"
    purpose = "Answer questions about the user's health data"

    @property
    def input_type(self) -> type[AssistantInput]:
        return AssistantInput

    @property
    def output_type(self) -> type[AssistantOutput]:
        return AssistantOutput

    async def _execute(self, validated_input: AssistantInput) -> AssistantOutput:
        message = validated_input.user_message
        context = validated_input.health_context

        if validated_input.use_cache:
            cached = self.store.get_cached_assistant_reply(
                message, max_age_hours=self.settings.app.assistant_cache_hours
            )
            if cached:
                self.logger.debug("Serving cached reply")
                return AssistantOutput(
                    agent_id=self.agent_id,
                    message=cached,
                    confidence=0.95,
                    sources=["cached"],
                )

        openai_settings = self.settings.openai
        if not openai_settings.is_configured:
            if self.settings.app.use_fallback_assistant:
                self.logger.info("OpenAI is not configured; using rule-based reply")
                return self.generate_fallback_response(message, context)
            raise AssistantNotConfiguredError(
                self.agent_id, "Assistant not configured. Please set OPENAI_API_KEY."
            )

        context_text = format_health_context(context)
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": self._build_prompt(context_text, message)},
        ]
        try:
            result = await asyncio.to_thread(
                chat_completion,
                openai_settings,
                messages,
                temperature=openai_settings.temperature,
                max_tokens=openai_settings.max_tokens,
            )
        except OpenAIClientError as exc:
            if not self.settings.app.use_fallback_assistant:
                raise AgentExecutionError(self.agent_id, str(exc)) from exc
            self.logger.warning("Chat completion failed, using rule-based reply: %s", exc)
            return self.generate_fallback_response(message, context)

        self.store.save_assistant_reply(message, result["content"], context_text)
        return AssistantOutput(
            agent_id=self.agent_id,
            message=result["content"],
            confidence=0.9,
            sources=[f"openai:{openai_settings.model_name}"],
            usage=result.get("usage", {}),
        )

    async def generate_health_insights(self, context: HealthContext) -> AssistantOutput:
        return await self.run(
            {"user_message": INSIGHTS_PROMPT, "health_context": context, "use_cache": False}
        )

    async def generate_recommendations(self, context: HealthContext) -> AssistantOutput:
        return await self.run(
            {"user_message": RECOMMENDATIONS_PROMPT, "health_context": context, "use_cache": False}
        )

    @staticmethod
    def _build_prompt(context_text: str, user_message: str) -> str:
        return (
            "Based on the user's current health data and their question, provide a helpful, "
            "personalized response.\n\n"
            f"Health Context:\n{context_text}\n\n"
            f'User Question: "{user_message}"\n\n'
            "Acknowledge their current status and trends, answer the question with insights "
            "from their data, and offer specific recommendations where appropriate."
        )

    # -------------------------------------------------------------------------
    # Rule-based replies
    # -------------------------------------------------------------------------

    def generate_fallback_response(self, user_message: str, context: HealthContext) -> AssistantOutput:
        text = user_message.lower()
        metrics = context.current_metrics
        trends = context.recent_trends
        confidence = 0.8

        if any(keyword in text for keyword in SLEEP_KEYWORDS):
            deep = format_number(metrics.deep_sleep_percentage)
            rem = format_number(metrics.rem_sleep_percentage)
            consistency = format_number(metrics.sleep_consistency)
            sleep_quality = (
                metrics.deep_sleep_percentage + metrics.rem_sleep_percentage + metrics.sleep_consistency
            ) / 3
            if sleep_quality > 70:
                reply = (
                    f"Your sleep metrics look great! With {deep}% deep sleep and {rem}% REM sleep, "
                    f"plus {consistency}% consistency, you're doing well. Your sleep trend is "
                    f"{trends.sleep_trend.value}. Keep maintaining your good sleep hygiene!"
                )
            else:
                reply = (
                    f"I see some opportunities to improve your sleep quality. Your current deep sleep "
                    f"is at {deep}% and REM sleep at {rem}%. Try maintaining a consistent bedtime, "
                    "creating a cool, dark environment, and avoiding screens before bed. Your sleep "
                    f"consistency score of {consistency}% suggests working on a regular schedule could help."
                )

        elif any(keyword in text for keyword in HEART_KEYWORDS):
            rhr = metrics.resting_heart_rate
            hrv = metrics.heart_rate_variability
            if rhr <= 0:
                rhr_note = "No resting heart rate data is available yet."
            elif rhr < 70:
                rhr_note = "Your resting heart rate is in a good range!"
            else:
                rhr_note = "There's room to improve your resting heart rate through cardio exercise."
            hrv_note = (
                "Your heart rate variability indicates good recovery capacity."
                if hrv > 35
                else "Consider stress management and recovery techniques to improve HRV."
            )
            reply = (
                f"Your cardiovascular health shows a resting heart rate of {format_number(rhr)} bpm "
                f"and HRV of {format_number(hrv)} ms. {rhr_note} {hrv_note} "
                f"Your heart health trend is {trends.heart_health_trend.value}."
            )

        elif any(keyword in text for keyword in SCORE_KEYWORDS):
            parts = [
                f"Your current vitality score is {context.vitality_score}/100, putting you in the "
                f'"{context.fitness_level.value}" category. This score combines your cardiovascular '
                "health (30%), recovery & sleep (35%), activity & training (30%), and consistency (5%)."
            ]
            if context.top_concerns:
                parts.append(f"Focus areas include: {', '.join(context.top_concerns)}.")
            if context.strengths:
                parts.append(f"Your strengths are: {', '.join(context.strengths)}.")
            parts.append("What specific area would you like to work on?")
            reply = " ".join(parts)

        elif any(keyword in text for keyword in ACTIVITY_KEYWORDS):
            steps = metrics.daily_steps
            weekly_training = daily_to_weekly_minutes(metrics.daily_training_time)
            steps_note = (
                "Great job on your daily activity!"
                if steps >= 8000
                else "Try to increase your daily steps toward 8,000-10,000."
            )
            training_note = (
                "You're meeting the recommended exercise guidelines!"
                if weekly_training >= 150
                else "Aim for 150+ minutes of exercise weekly for optimal health."
            )
            reply = (
                f"Your activity levels show {format_number(steps)} daily steps and "
                f"{round_to_int(weekly_training)} minutes of weekly training. {steps_note} "
                f"{training_note} Your activity trend is {trends.activity_trend.value}. "
                "Consistency is key for long-term health benefits."
            )

        else:
            confidence = 0.7
            focus = ", ".join(context.top_concerns) or "maintaining current progress"
            reply = (
                f"Based on your vitality score of {context.vitality_score}/100 "
                f"({context.fitness_level.value}), I can help you understand your health data better. "
                f"Your key areas for focus are: {focus}. What specific aspect of your health would you "
                "like to explore? I can discuss your sleep patterns, cardiovascular metrics, training "
                "data, or overall vitality score."
            )

        return AssistantOutput(
            agent_id=self.agent_id,
            message=reply,
            confidence=confidence,
            sources=["fallback"],
        )
