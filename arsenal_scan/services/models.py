from pydantic import BaseModel
from typing import Optional

class AnalyzeRequest(BaseModel):
    image: Optional[str] = None  # base64 screenshot, bare or FileReader data URL

class AnalyzeResponse(BaseModel):
    ok: bool
    duration_ms: int = 0
    results: Optional[dict[str, int]] = None    # raw GridCount from the model
    aggregated: Optional[dict[str, int]] = None # weapon name -> count
    total_count: int = 0
    unique_types: int = 0
    summary: Optional[str] = None
    error_code: Optional[str] = None
    error: Optional[str] = None                 # user-facing, never the underlying exception

class ReferenceResponse(BaseModel):
    ok: bool
    data_url: Optional[str] = None
    error: Optional[str] = None

class StatusResponse(BaseModel):
    busy: bool
    reference_ready: bool
    inference_adapter: str
    last_error: Optional[str] = None
    last_result: Optional[AnalyzeResponse] = None  # most recent finished analysis
    logs: list[str]
