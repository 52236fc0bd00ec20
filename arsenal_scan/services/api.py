from typing import Optional
from fastapi import FastAPI, File, UploadFile
from arsenal_scan.services.config import Config
from arsenal_scan.services.models import (
    AnalyzeRequest, AnalyzeResponse, ReferenceResponse, StatusResponse,
)
from arsenal_scan.services.status_store import StatusStore
from arsenal_scan.orchestrator.analyzer import Analyzer
from arsenal_scan.orchestrator.contracts import AnalysisResult
from arsenal_scan.orchestrator import errors
from arsenal_scan.adapters.image.acquire import encode_image, from_base64
from arsenal_scan.adapters.reference.loader import ReferenceLoader


def build_inference(cfg: Config, status: StatusStore):
    """Inference adapter chosen by INFERENCE_ADAPTER: gemini | gemini_rest | mock."""
    if cfg.inference_adapter == "gemini":
        from arsenal_scan.adapters.inference.gemini_inference import GeminiInference
        return GeminiInference(status, api_key=cfg.api_key, model=cfg.model)
    if cfg.inference_adapter == "gemini_rest":
        from arsenal_scan.adapters.inference.gemini_rest import GeminiRestInference
        return GeminiRestInference(status, api_key=cfg.api_key, model=cfg.model,
                                   base_url=cfg.base_url, timeout=cfg.timeout)
    from arsenal_scan.adapters.inference.mock_inference import MockInference
    return MockInference(status)


def _to_response(result: AnalysisResult) -> AnalyzeResponse:
    if not result.ok:
        return AnalyzeResponse(ok=False, duration_ms=result.duration_ms,
                               error_code=result.error_code, error=result.error)
    return AnalyzeResponse(
        ok=True,
        duration_ms=result.duration_ms,
        results=result.grid,
        aggregated=result.aggregated,
        total_count=result.summary.total_count,
        unique_types=result.summary.unique_types,
        summary=result.summary.text,
    )


def create_app(cfg: Optional[Config] = None, inference=None, reference=None,
               status: Optional[StatusStore] = None) -> FastAPI:
    cfg = cfg or Config.load()  # raises MissingCredential → server refuses to start
    status = status or StatusStore()

    if inference is None:
        inference = build_inference(cfg, status)
    status.log(f"inference adapter: {type(inference).__name__}")

    if reference is None:
        reference = ReferenceLoader(status, cfg.reference_image)
    try:
        reference.load()
        status.reference_ready = True
    except errors.AssetLoadFailure as e:
        # not retried: analysis stays disabled until restart
        status.log(f"reference: load failed: {e}")
        status.reference_ready = False
        status.last_error = errors.MESSAGES[errors.ERR_ASSET_LOAD]

    analyzer = Analyzer(inference=inference, reference=reference, status_store=status)

    app = FastAPI(title="arsenal-scan api")
    app.state.status = status
    app.state.analyzer = analyzer

    @app.get("/health")
    def health():
        checks = {
            "api": True,
            "inference_adapter": type(inference).__name__,
            "reference_ready": reference.ready,
        }
        checks["all_ok"] = checks["api"] and checks["reference_ready"]
        return checks

    @app.get("/status", response_model=StatusResponse)
    def get_status():
        return StatusResponse(
            busy=status.busy,
            reference_ready=status.reference_ready,
            inference_adapter=cfg.inference_adapter,
            last_error=status.last_error,
            last_result=_to_response(status.last_result) if status.last_result else None,
            logs=status.logs,
        )

    @app.get("/reference", response_model=ReferenceResponse)
    def get_reference():
        """Arsenal grid preview for the page; analysis is disabled while ok=false."""
        if not reference.ready:
            return ReferenceResponse(ok=False, error=errors.MESSAGES[errors.ERR_ASSET_LOAD])
        return ReferenceResponse(ok=True, data_url=reference.image.data_url)

    @app.post("/analyze", response_model=AnalyzeResponse)
    def analyze(req: AnalyzeRequest):
        status.log("ANALYZE received")
        return _to_response(analyzer.analyze(from_base64(req.image)))

    @app.post("/analyze/upload", response_model=AnalyzeResponse)
    def analyze_upload(file: Optional[UploadFile] = File(None)):
        """Multipart variant: raw screenshot file instead of base64 JSON."""
        image = None
        if file is not None:
            image = encode_image(file.file.read(), file.content_type)
            if image is None:
                status.log(f"ANALYZE_UPLOAD ignored non-image file: {file.content_type}")
        status.log("ANALYZE_UPLOAD received")
        return _to_response(analyzer.analyze(image.base64 if image else None))

    return app
