"""Per-simulation progress history on top of the storage port."""

import logging
from datetime import datetime, timezone
from typing import Any

from models.responses import ProgressEntry
from services.errors import SubmissionError
from services.storage import StoragePort

logger = logging.getLogger(__name__)

PROGRESS_NAMESPACE = "progress"


class ProgressService:
    def __init__(self, storage: StoragePort) -> None:
        self.storage = storage

    def save_progress(self, simulation_id: str, score: int, feedback: Any = None) -> ProgressEntry:
        """Record the latest result of a simulation, replacing any earlier one."""
        if not simulation_id:
            raise SubmissionError("Simulation id is required")
        if not 0 <= score <= 100:
            raise SubmissionError(f"Score must be between 0 and 100, got {score}")

        entry = ProgressEntry(
            simulation_id=simulation_id,
            score=score,
            feedback=feedback,
            completed_at=datetime.now(timezone.utc).isoformat(),
        )
        self.storage.set(PROGRESS_NAMESPACE, simulation_id, entry.model_dump(mode="json"))
        logger.info("Saved progress for %s: %d", simulation_id, score)
        return entry

    def get_progress(self, simulation_id: str) -> ProgressEntry | None:
        raw = self.storage.get(PROGRESS_NAMESPACE, simulation_id)
        if raw is None:
            return None
        return ProgressEntry.model_validate(raw)

    def list_progress(self) -> list[ProgressEntry]:
        entries = []
        for key in self.storage.keys(PROGRESS_NAMESPACE):
            entry = self.get_progress(key)
            if entry is not None:
                entries.append(entry)
        return sorted(entries, key=lambda e: e.completed_at, reverse=True)

    def clear_progress(self, simulation_id: str) -> None:
        self.storage.delete(PROGRESS_NAMESPACE, simulation_id)
