import pytest

from services.errors import SubmissionError
from services.progress import PROGRESS_NAMESPACE, ProgressService
from services.storage import InMemoryStorage


class TestProgressService:
    def setup_method(self):
        self.storage = InMemoryStorage()
        self.svc = ProgressService(self.storage)

    def test_save_and_get(self):
        entry = self.svc.save_progress("default-prioritization-1", 82, ["Good: placed correctly at #1."])
        assert entry.score == 82
        assert entry.completed_at

        loaded = self.svc.get_progress("default-prioritization-1")
        assert loaded == entry
        assert self.storage.keys(PROGRESS_NAMESPACE) == ["default-prioritization-1"]

    def test_latest_result_replaces_earlier(self):
        self.svc.save_progress("sim", 40)
        self.svc.save_progress("sim", 90)
        assert self.svc.get_progress("sim").score == 90
        assert len(self.svc.list_progress()) == 1

    def test_list_progress(self):
        self.svc.save_progress("a", 10)
        self.svc.save_progress("b", 20)
        assert {e.simulation_id for e in self.svc.list_progress()} == {"a", "b"}

    def test_unknown_simulation(self):
        assert self.svc.get_progress("missing") is None

    def test_clear_progress(self):
        self.svc.save_progress("a", 10)
        self.svc.clear_progress("a")
        assert self.svc.get_progress("a") is None

    @pytest.mark.parametrize("score", [-1, 101])
    def test_rejects_out_of_range_score(self, score):
        with pytest.raises(SubmissionError):
            self.svc.save_progress("a", score)

    def test_rejects_empty_id(self):
        with pytest.raises(SubmissionError):
            self.svc.save_progress("", 50)
