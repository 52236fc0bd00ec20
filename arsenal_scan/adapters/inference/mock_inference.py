import random
from arsenal_scan.adapters.inference.base import InferenceAdapter
from arsenal_scan.orchestrator.grid import grid_keys

class MockInference(InferenceAdapter):
    def __init__(self, status_store, counts: dict[str, int] | None = None):
        self.status = status_store
        self.counts = counts
        self.calls = 0

    def identify(self, arsenal_b64: str, user_b64: str) -> dict[str, int]:
        self.calls += 1
        if self.counts is not None:
            grid = {key: self.counts.get(key, 0) for key in grid_keys()}
        else:
            # Mock: ignore both images, a few random hits
            grid = {key: random.choice([0, 0, 0, 1, 2]) for key in grid_keys()}
        self.status.log(f"mock_inference: {sum(grid.values())} hits")
        return grid
