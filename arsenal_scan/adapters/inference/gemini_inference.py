"""
Gemini arsenal counter via the google-genai SDK.

Sends the prompt, the arsenal grid (PNG) and the user screenshot (JPEG) in one
generate_content call with a JSON response schema, so the reply is a flat
{"row,col": count} object for all 18 slots.

Requires GEMINI_API_KEY (or API_KEY) in environment / .env.
"""
import base64

from google import genai
from google.genai import types

from arsenal_scan.adapters.inference.base import InferenceAdapter
from arsenal_scan.orchestrator.errors import InferenceFailure, MissingCredential
from arsenal_scan.orchestrator.grid import (
    ANALYSIS_PROMPT, REFERENCE_MIME, SCREENSHOT_MIME,
    build_response_schema, parse_grid_count,
)

DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiInference(InferenceAdapter):
    def __init__(self, status_store, api_key: str | None, model: str = DEFAULT_MODEL, client=None):
        self.status = status_store
        self.model = model
        if client is None:
            if not api_key:
                raise MissingCredential("GEMINI_API_KEY is not set")
            client = genai.Client(api_key=api_key)
        self._client = client
        self._schema = build_response_schema()
        self.status.log(f"gemini_inference: ready (model={model})")

    def identify(self, arsenal_b64: str, user_b64: str) -> dict[str, int]:
        try:
            contents = [
                types.Part.from_text(text=ANALYSIS_PROMPT),
                types.Part.from_bytes(data=base64.b64decode(arsenal_b64), mime_type=REFERENCE_MIME),
                types.Part.from_bytes(data=base64.b64decode(user_b64), mime_type=SCREENSHOT_MIME),
            ]
            response = self._client.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=self._schema,
                ),
            )
            grid = parse_grid_count(response.text)
        except Exception as e:
            self.status.log(f"gemini_inference: API error: {type(e).__name__}: {e}")
            raise InferenceFailure() from e

        self.status.log(f"gemini_inference: → {sum(v for v in grid.values() if v > 0)} hits")
        return grid
