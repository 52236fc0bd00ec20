import time
from arsenal_scan.orchestrator.aggregate import aggregate, summarize
from arsenal_scan.orchestrator.contracts import AnalysisResult
from arsenal_scan.orchestrator import errors


def _failed(code: str, duration_ms: int = 0) -> AnalysisResult:
    return AnalysisResult(ok=False, duration_ms=duration_ms, error_code=code, error=errors.MESSAGES[code])


class Analyzer:
    def __init__(self, inference, reference, status_store):
        self.inference = inference
        self.reference = reference
        self.status = status_store

    def analyze(self, user_b64: str | None) -> AnalysisResult:
        """
        Screenshot → inference → aggregate → summary.
        Only one analysis runs at a time; a second caller gets ERR_BUSY.
        """
        if not self.reference.ready:
            self.status.log("analyze: rejected, arsenal image not loaded")
            return _failed(errors.ERR_ASSET_LOAD)
        if not user_b64:
            self.status.log("analyze: rejected, no image uploaded")
            return _failed(errors.ERR_INPUT_MISSING)
        if not self.status.try_acquire():
            self.status.log("analyze: rejected, busy")
            return _failed(errors.ERR_BUSY)

        t0 = time.time()
        self.status.last_result = None  # cleared while this run is in flight
        try:
            self.status.log("analyze: inference.identify")
            grid = self.inference.identify(self.reference.image.base64, user_b64)

            aggregated = aggregate(grid)
            summary = summarize(aggregated)
            dt = int((time.time() - t0) * 1000)
            self.status.log(f"analyze: done total={summary.total_count} types={summary.unique_types} dt={dt}ms")
            return self._finish(AnalysisResult(
                ok=True, duration_ms=dt, grid=grid, aggregated=aggregated, summary=summary,
            ))

        except errors.InferenceFailure as e:
            dt = int((time.time() - t0) * 1000)
            self.status.log(f"analyze: inference failed: {e}")
            return self._finish(_failed(errors.ERR_INFERENCE, dt))
        except Exception as e:
            dt = int((time.time() - t0) * 1000)
            self.status.log(f"analyze: error {type(e).__name__}: {e}")
            return self._finish(_failed(errors.ERR_INFERENCE, dt))
        finally:
            self.status.release()

    def _finish(self, result: AnalysisResult) -> AnalysisResult:
        # only called while holding the busy flag
        self.status.last_result = result
        self.status.last_error = result.error
        return result
