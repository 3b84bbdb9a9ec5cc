from typing import Any

from pydantic import BaseModel, Field, field_validator

from models.schemas.roleplay import Channel, ChatMessage, Persona, Scenario
from models.schemas.task_rubric import TaskRubric


class TextSubmission(BaseModel):
    text: str = Field(..., description="Free-text reply to be scored")


class CommentRepliesSubmission(BaseModel):
    replies: dict[str, str] = Field(..., min_length=1, description="Reply text keyed by comment id")


class PrioritizationSubmission(BaseModel):
    user_order: list[str] = Field(..., description="Task ids in the order the user ranked them")
    ideal_ranks: dict[str, int] = Field(..., description="1-based ideal rank keyed by task id")


class PlacementSubmission(BaseModel):
    placements: dict[str, str] = Field(default_factory=dict, description="Category id keyed by item id")
    correct_placements: dict[str, str] = Field(..., description="Reference category id keyed by item id")


class TaskSubmission(BaseModel):
    answers: dict[str, str | list[str]] = Field(..., description="Form answers keyed by field name")
    rubric: TaskRubric | None = Field(default=None, description="Inline rubric; takes precedence over rubric_name")
    rubric_name: str | None = None


class TaskScoresSubmission(BaseModel):
    task_scores: dict[str, int] = Field(..., description="0-100 score keyed by task id")

    @field_validator("task_scores")
    @classmethod
    def _check_range(cls, v: dict[str, int]) -> dict[str, int]:
        for task_id, score in v.items():
            if not 0 <= score <= 100:
                raise ValueError(f"Score for {task_id} must be between 0 and 100")
        return v


class IncomingMessageRequest(BaseModel):
    sender_id: str
    channel: Channel
    personas: list[Persona] | None = None


class RoleplayReplyRequest(BaseModel):
    sender_id: str
    history: list[ChatMessage] = []
    last_message: str = Field(..., max_length=5000)
    scenario: Scenario | None = None
    personas: list[Persona] | None = None


class EvaluateRequest(BaseModel):
    scenario: Scenario
    history: list[ChatMessage] = Field(default_factory=list, max_length=500)
    personas: list[Persona] | None = None


class SaveProgressRequest(BaseModel):
    score: int
    feedback: Any = None
