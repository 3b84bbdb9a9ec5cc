"""Declarative rubric configuration for keyword-weighted text scoring."""

import re

from pydantic import BaseModel, Field, model_validator


class Criterion(BaseModel):
    """A named, weighted competency detected through trigger phrases.

    The hit ratio is the number of distinct triggers found divided by
    ``saturation`` (the trigger count unless set), capped at 1.0.
    """
    name: str
    weight: int = Field(..., ge=0, le=100)
    triggers: list[str] = Field(..., min_length=1)
    saturation: int | None = Field(default=None, ge=1)
    positive_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    positive_feedback: str
    corrective_feedback: str

    @property
    def hits_for_full_credit(self) -> int:
        return self.saturation or len(self.triggers)


class AdjustmentRule(BaseModel):
    """Bonus or penalty applied when a tone/offer pattern is detected.

    Fires when any trigger phrase or the regex ``pattern`` matches, unless
    one of the ``unless`` phrases is also present. Empty ``targets`` means
    ``points`` are taken off the total instead of individual sub-scores.
    """
    name: str
    triggers: list[str] = []
    pattern: str | None = None
    unless: list[str] = []
    targets: list[str] = []
    ratio_scale: float = Field(default=1.0, ge=0.0)
    ratio_offset: float = Field(default=0.0, ge=-1.0, le=1.0)
    points: int = Field(default=0, ge=0, le=100)
    feedback: str | None = None
    is_penalty: bool = True

    @model_validator(mode="after")
    def _check_detector(self) -> "AdjustmentRule":
        if not self.triggers and not self.pattern:
            raise ValueError(f"Rule '{self.name}' needs triggers or a pattern")
        if self.pattern:
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ValueError(f"Rule '{self.name}' has an invalid pattern: {e}") from e
        return self


class WeightedRubric(BaseModel):
    """A simulation's full scoring configuration. Weights sum to 100."""
    name: str
    criteria: list[Criterion] = Field(..., min_length=1)
    adjustments: list[AdjustmentRule] = []

    @model_validator(mode="after")
    def _check_consistency(self) -> "WeightedRubric":
        names = [c.name for c in self.criteria]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate criterion names in rubric '{self.name}'")

        total_weight = sum(c.weight for c in self.criteria)
        if total_weight != 100:
            raise ValueError(
                f"Criterion weights in rubric '{self.name}' sum to {total_weight}, expected 100"
            )

        known = set(names)
        for rule in self.adjustments:
            unknown = [t for t in rule.targets if t not in known]
            if unknown:
                raise ValueError(
                    f"Rule '{rule.name}' targets unknown criteria: {', '.join(unknown)}"
                )
        return self

    @property
    def weights(self) -> dict[str, int]:
        return {c.name: c.weight for c in self.criteria}
