"""Configuration and domain contracts shared across services."""

from models.schemas.roleplay import (
    Channel,
    ChatMessage,
    PerformanceEvaluation,
    Persona,
    Scenario,
)
from models.schemas.rubric import AdjustmentRule, Criterion, WeightedRubric
from models.schemas.task_rubric import FieldCriterion, TaskRubric

__all__ = [
    "AdjustmentRule",
    "Criterion",
    "WeightedRubric",
    "FieldCriterion",
    "TaskRubric",
    "Channel",
    "ChatMessage",
    "PerformanceEvaluation",
    "Persona",
    "Scenario",
]
