import threading
from dataclasses import dataclass, field
from typing import Optional, List
from arsenal_scan.orchestrator.contracts import AnalysisResult

LOG_CAPACITY = 200

@dataclass
class StatusStore:
    busy: bool = False
    reference_ready: bool = False
    last_error: Optional[str] = None
    last_result: Optional[AnalysisResult] = None
    logs: List[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def try_acquire(self) -> bool:
        """Single-flight: claim the busy flag, False if an analysis is already running.

        FastAPI runs sync routes in a threadpool, so check-and-set must be atomic.
        """
        with self._lock:
            if self.busy:
                return False
            self.busy = True
            return True

    def release(self):
        with self._lock:
            self.busy = False

    def log(self, msg: str):
        self.logs.append(msg)
        if len(self.logs) > LOG_CAPACITY:
            self.logs = self.logs[-LOG_CAPACITY:]
