"""Per-field rubric configuration for multi-field task submissions."""

from pydantic import BaseModel, Field, model_validator


class FieldCriterion(BaseModel):
    """Scoring rule for one field of a task form.

    Keyword coverage earns up to ``max_score``; meeting ``min_length`` adds
    30% and more than 50 characters adds 20%, capped at ``max_score``.
    """
    field: str
    max_score: int = Field(..., gt=0)
    keywords: list[str] = []
    min_length: int | None = Field(default=None, ge=1)


class TaskRubric(BaseModel):
    name: str
    criteria: list[FieldCriterion] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_fields(self) -> "TaskRubric":
        fields = [c.field for c in self.criteria]
        if len(set(fields)) != len(fields):
            raise ValueError(f"Duplicate fields in task rubric '{self.name}'")
        return self

    @property
    def max_possible(self) -> int:
        return sum(c.max_score for c in self.criteria)
