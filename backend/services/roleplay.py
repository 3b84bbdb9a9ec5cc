"""Roleplay adapter: simulated coworker messages and performance review.

The language model is an unreliable dependency. Every operation returns a
fixed fallback instead of raising when the model is unavailable, slow, or
answers with something unusable.
"""

import logging
import math

from models.schemas.roleplay import (
    Channel,
    ChatMessage,
    PerformanceEvaluation,
    Persona,
    Scenario,
)
from services import gemini_client, prompt_builder
from services.personas import find_persona

logger = logging.getLogger(__name__)

FALLBACK_INCOMING_MESSAGE = "Thinking about the roadmap..."
FALLBACK_REPLY = "Got it."
UNKNOWN_SENDER_REPLY = "..."


def fallback_evaluation() -> PerformanceEvaluation:
    return PerformanceEvaluation(
        score=5,
        feedback="Could not generate evaluation due to an error. Please try again.",
        strengths=["Attempted to engage with the scenario"],
        weaknesses=["Evaluation service unavailable"],
        degraded=True,
    )


async def generate_incoming_message(
    sender_id: str,
    channel: Channel,
    personas: list[Persona] | None = None,
) -> str:
    """A message a coworker posts unprompted into ``channel``."""
    sender = find_persona(sender_id, personas)
    if sender is None:
        logger.warning("Unknown roleplay sender: %s", sender_id)
        return UNKNOWN_SENDER_REPLY

    text = await gemini_client.generate_text(
        prompt_builder.build_incoming_message_prompt(channel),
        system_instruction=prompt_builder.build_persona_instruction(sender),
        temperature=0.8,
        max_output_tokens=60,
    )
    if not text:
        logger.warning("Incoming message unavailable, using fallback")
        return FALLBACK_INCOMING_MESSAGE
    return text


async def generate_reply(
    persona: Persona | None,
    history: list[ChatMessage],
    last_message: str,
    scenario: Scenario | None = None,
    personas: list[Persona] | None = None,
) -> str:
    """In-character reply from ``persona`` to the user's last message."""
    if persona is None:
        return UNKNOWN_SENDER_REPLY

    prompt = prompt_builder.build_reply_prompt(
        persona, history, last_message, scenario=scenario, personas=personas
    )
    text = await gemini_client.generate_text(
        prompt,
        system_instruction=prompt_builder.build_persona_instruction(persona),
        temperature=0.7,
    )
    if not text:
        logger.warning("Roleplay reply unavailable, using fallback")
        return FALLBACK_REPLY
    return text


def _coerce_evaluation(data: dict) -> PerformanceEvaluation | None:
    raw_score = data.get("score")
    if (
        isinstance(raw_score, bool)
        or not isinstance(raw_score, (int, float))
        or not math.isfinite(raw_score)
    ):
        logger.error("Evaluation response has no numeric score: %r", raw_score)
        return None

    strengths = data.get("strengths") or []
    weaknesses = data.get("weaknesses") or []
    if not isinstance(strengths, list) or not isinstance(weaknesses, list):
        logger.error("Evaluation strengths/weaknesses are not lists")
        return None

    return PerformanceEvaluation(
        score=min(10, max(1, round(raw_score))),
        feedback=str(data.get("feedback") or ""),
        strengths=[str(s) for s in strengths],
        weaknesses=[str(w) for w in weaknesses],
    )


async def evaluate_performance(
    scenario: Scenario,
    history: list[ChatMessage],
    personas: list[Persona] | None = None,
) -> PerformanceEvaluation:
    """Score (1-10) how the user handled ``scenario``, with mentor feedback."""
    prompt = prompt_builder.build_evaluation_prompt(scenario, history, personas)
    data = await gemini_client.generate_json(prompt, temperature=0.3)
    if data is None:
        logger.warning("Evaluation unavailable, using fallback")
        return fallback_evaluation()

    evaluation = _coerce_evaluation(data)
    if evaluation is None:
        return fallback_evaluation()
    return evaluation
