"""All prompt templates for Gemini API calls."""

from models.schemas.roleplay import Channel, ChatMessage, Persona, Scenario
from services.personas import CURRENT_USER_ID, find_persona

REPLY_HISTORY_WINDOW = 5
EVALUATION_HISTORY_WINDOW = 15


def _format_history(
    history: list[ChatMessage],
    personas: list[Persona] | None,
    window: int,
    include_role: bool,
) -> str:
    lines = []
    for message in history[-window:]:
        speaker = find_persona(message.sender_id, personas)
        name = speaker.name if speaker else "User"
        if include_role:
            role = speaker.role if speaker else "Unknown"
            lines.append(f"{name} ({role}): {message.text}")
        else:
            lines.append(f"{name}: {message.text}")
    return "\n".join(lines)


def build_persona_instruction(persona: Persona) -> str:
    """System instruction that keeps the model in character."""
    return f"""You are roleplaying as {persona.name}, a {persona.role} at a tech company.
Your bio is: "{persona.bio}".
You are communicating in a Slack-like workspace.
Keep your messages relatively short, informal (unless your persona is formal), and realistic for a work environment.
Use common tech slang if appropriate for the role.
Do not use hashtags.
Do not include the name of the speaker in the output, just the message content."""


def build_incoming_message_prompt(channel: Channel) -> str:
    """Unprompted message a coworker posts into a channel."""
    return f"""Context: You are posting a message in the channel "{channel.name}".
The purpose of this channel is: "{channel.purpose or 'General discussion'}".

Generate a single realistic Slack message that this person might send right now.
It could be a question, a status update, a complaint, or a random thought relevant to their role and the channel.
If the channel is 'general', keep it light or company related.
If 'engineering', make it technical.
If 'design', make it about UX/UI.

Current mood: slightly stressed but professional."""


def build_reply_prompt(
    persona: Persona,
    history: list[ChatMessage],
    last_message: str,
    scenario: Scenario | None = None,
    personas: list[Persona] | None = None,
) -> str:
    """Reply from a stakeholder to the user's latest message."""
    scenario_context = ""
    if scenario:
        scenario_context = f"""
CRITICAL CONTEXT: There is an active conflict scenario: "{scenario.title}".
Description: {scenario.description}
You are a stakeholder in this. React according to your role and bio.
If you are the initiator, press your point.
If you are an opposing stakeholder, argue back or express concern.
If you are neutral, be confused or ask for clarification.
"""

    recent = _format_history(history, personas, REPLY_HISTORY_WINDOW, include_role=True)
    return f"""Context: You are in a chat conversation.
{scenario_context}
Recent history:
{recent}

The Product Manager (User) just said: "{last_message}"

Reply to the conversation. Address the PM or the previous speaker.
Maintain your persona ({persona.role}).
Keep it under 3 sentences. Be reactive and opinionated."""


def build_evaluation_prompt(
    scenario: Scenario,
    history: list[ChatMessage],
    personas: list[Persona] | None = None,
) -> str:
    """Mentor evaluation of the user's handling of a scenario. Returns JSON."""
    transcript = _format_history(history, personas, EVALUATION_HISTORY_WINDOW, include_role=False)
    return f"""You are a Senior Product Leader and mentor.
A Junior PM (User, id "{CURRENT_USER_ID}") has just handled a conflict scenario in a simulated workplace.

Scenario Title: {scenario.title}
Scenario Description: {scenario.description}

Transcript of the resolution attempt:
{transcript}

Evaluate the PM's performance based on:
1. Stakeholder Empathy (Did they listen?)
2. Business Value (Did they protect the business interests?)
3. Communication (Was it clear and professional?)
4. Decision Making (Did they find a resolution or just delay?)

Return ONLY valid JSON (no markdown, no code fences) with this exact structure:
{{
  "score": <integer 1-10>,
  "feedback": "<2-3 sentence overall assessment>",
  "strengths": ["<strength 1>", "<strength 2>"],
  "weaknesses": ["<weakness 1>", "<weakness 2>"]
}}"""
