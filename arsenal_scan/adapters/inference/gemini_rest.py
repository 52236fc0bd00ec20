"""
Gemini arsenal counter over the public REST API (generateContent).
Same request as GeminiInference but with plain httpx, so it runs without the
SDK and can be pointed at scripts/fake_gemini_server.py via GEMINI_BASE_URL.
"""
import httpx

from arsenal_scan.adapters.inference.base import InferenceAdapter
from arsenal_scan.orchestrator.errors import InferenceFailure, MissingCredential
from arsenal_scan.orchestrator.grid import (
    ANALYSIS_PROMPT, REFERENCE_MIME, SCREENSHOT_MIME,
    build_response_schema, parse_grid_count,
)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiRestInference(InferenceAdapter):
    def __init__(self, status_store, api_key: str | None, model: str = DEFAULT_MODEL,
                 base_url: str = DEFAULT_BASE_URL, timeout: float = 120.0,
                 client: httpx.Client | None = None):
        if not api_key:
            raise MissingCredential("GEMINI_API_KEY is not set")
        self.status = status_store
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self._client = client
        self.status.log(f"gemini_rest: ready (model={model}, base={self.base_url})")

    @property
    def url(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"

    def build_payload(self, arsenal_b64: str, user_b64: str) -> dict:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": ANALYSIS_PROMPT},
                        {"inline_data": {"mime_type": REFERENCE_MIME, "data": arsenal_b64}},
                        {"inline_data": {"mime_type": SCREENSHOT_MIME, "data": user_b64}},
                    ],
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": build_response_schema(),
            },
        }

    def identify(self, arsenal_b64: str, user_b64: str) -> dict[str, int]:
        payload = self.build_payload(arsenal_b64, user_b64)
        headers = {
            "x-goog-api-key": self._api_key,
            "Content-Type": "application/json",
        }

        try:
            if self._client is not None:
                resp = self._client.post(self.url, json=payload, headers=headers, timeout=self.timeout)
            else:
                resp = httpx.post(self.url, json=payload, headers=headers, timeout=self.timeout)
            if not resp.is_success:
                raise InferenceFailure(f"HTTP {resp.status_code}: {resp.text[:300]}")
            text = resp.json()["candidates"][0]["content"]["parts"][0]["text"]
            grid = parse_grid_count(text)
        except Exception as e:
            self.status.log(f"gemini_rest: API error: {type(e).__name__}: {e}")
            raise InferenceFailure() from e

        self.status.log(f"gemini_rest: → {sum(v for v in grid.values() if v > 0)} hits")
        return grid
