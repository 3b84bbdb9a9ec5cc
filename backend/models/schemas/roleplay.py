"""Participants, channels and transcripts of the Slack-style roleplay."""

from pydantic import BaseModel, Field


class Persona(BaseModel):
    """A simulated coworker the language model plays."""
    id: str
    name: str
    role: str
    bio: str = ""
    status: str = "online"  # online, busy, offline


class Channel(BaseModel):
    id: str
    name: str
    purpose: str = ""
    member_ids: list[str] = []


class ChatMessage(BaseModel):
    sender_id: str
    text: str = Field(..., max_length=5000)


class Scenario(BaseModel):
    """An active conflict the user is expected to resolve."""
    title: str
    description: str = ""
    id: str = ""
    channel_id: str = ""
    initiator_id: str = ""
    initial_message: str = ""
    stakeholders: list[str] = []


class PerformanceEvaluation(BaseModel):
    """Mentor-style evaluation of how the user handled a scenario."""
    score: int = Field(default=5, ge=1, le=10)
    feedback: str = ""
    strengths: list[str] = []
    weaknesses: list[str] = []
    degraded: bool = False
