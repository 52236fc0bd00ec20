from dataclasses import dataclass, field
from typing import Optional

from arsenal_scan.orchestrator.aggregate import Summary

GridCount = dict[str, int]        # "row,col" -> count, 18 entries
AggregatedCount = dict[str, int]  # weapon name -> summed count

@dataclass
class EncodedImage:
    base64: str                # bare payload, no data: prefix
    mime_type: str
    data_url: str              # displayable preview

@dataclass
class AnalysisResult:
    ok: bool
    duration_ms: int
    grid: Optional[GridCount] = None
    aggregated: AggregatedCount = field(default_factory=dict)
    summary: Optional[Summary] = None
    error_code: Optional[str] = None
    error: Optional[str] = None   # user-facing message only
