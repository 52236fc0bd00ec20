"""
Fake Gemini server for testing GeminiRestInference without an API key or network.

Simulates POST /v1beta/models/<model>:generateContent on port 9100.
Ignores the images and returns a random GridCount that follows the request's
responseSchema (every required key present, integer values).

Usage:
    python arsenal_scan/scripts/fake_gemini_server.py              (terminal 1)
    INFERENCE_ADAPTER=gemini_rest GEMINI_API_KEY=fake \
    GEMINI_BASE_URL=http://127.0.0.1:9100 \
    uvicorn arsenal_scan.web.app:app                                (terminal 2)
"""

import json
import random
import time
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI(title="fake-gemini-server")


@app.post("/v1beta/models/{model}:generateContent")
async def generate_content(model: str, request: Request):
    body = await request.json()
    if not request.headers.get("x-goog-api-key"):
        return JSONResponse(status_code=403, content={"error": {"code": 403, "message": "API key missing"}})

    parts = body.get("contents", [{}])[0].get("parts", [])
    images = [p for p in parts if "inline_data" in p]
    schema = body.get("generationConfig", {}).get("responseSchema", {})
    keys = schema.get("required", [])
    print(f"[gemini] {model}: {len(images)} images, {len(keys)} keys — thinking...")
    time.sleep(0.5)

    counts = {k: random.choice([0, 0, 0, 1, 2, 3]) for k in keys}
    print(f"[gemini] → {sum(counts.values())} hits")
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": json.dumps(counts)}]},
                "finishReason": "STOP",
            }
        ]
    }


if __name__ == "__main__":
    print("Fake Gemini server starting on http://localhost:9100")
    uvicorn.run(app, host="0.0.0.0", port=9100)
