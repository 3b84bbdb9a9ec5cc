from typing import Any

from pydantic import BaseModel


class ScoreResult(BaseModel):
    total: int = 0
    per_criterion: dict[str, int] = {}
    feedback: list[str] = []
    # Scoring transparency fields
    hit_ratios: dict[str, float] = {}
    matched_triggers: dict[str, list[str]] = {}
    penalties: list[str] = []


class TaskDistance(BaseModel):
    id: str
    user_rank: int
    ideal_rank: int
    distance: int
    verdict: str  # correct, acceptable, problem
    message: str = ""


class RankDistanceResult(BaseModel):
    total: int = 0
    total_distance: int = 0
    max_distance: float = 0.0
    per_task: list[TaskDistance] = []
    feedback: list[str] = []


class PlacementResult(BaseModel):
    total: int = 0
    per_item: dict[str, bool] = {}
    correct_count: int = 0
    total_items: int = 0
    ignored_items: list[str] = []
    feedback: list[str] = []


class CommentsScoreResponse(BaseModel):
    average_score: int = 0
    replies: dict[str, ScoreResult] = {}


class RoleplayMessageResponse(BaseModel):
    text: str


class ProgressEntry(BaseModel):
    simulation_id: str
    score: int
    feedback: Any = None
    completed_at: str


class TaskScoreResult(BaseModel):
    score: int = 0
    breakdown: dict[str, int] = {}
    strengths: list[str] = []
    improvements: list[str] = []
    method: str = "rubric"  # rubric, length


class TaskSummary(BaseModel):
    final_score: int = 0
    skills: dict[str, int] = {}
