"""
Arsenal grid geometry, the structured-output schema sent with every
inference request, and parsing of the model's JSON reply into a GridCount.

GridCount: {"row,col": count} for all 18 slots, e.g. {"0,0": 2, "0,1": 0, ...}
"""
import json

from arsenal_scan.orchestrator.errors import InferenceFailure

GRID_ROWS = 3
GRID_COLS = 6

REFERENCE_MIME = "image/png"
SCREENSHOT_MIME = "image/jpeg"

ANALYSIS_PROMPT = """
You are an expert weapon recognition and counting system.
You will be given two images:
1. 'Arsenal Image': A 6x3 grid of unique weapons. The grid has 3 rows (0-2) and 6 columns (0-5).
2. 'User Screenshot': A game screenshot that may contain multiple instances of weapons from the arsenal.

Your task is to:
1. Examine the 'User Screenshot' and identify all weapons that match those in the 'Arsenal Image'.
2. For EACH weapon slot in the 6x3 arsenal grid, count the total number of times the weapon from that slot appears in the 'User Screenshot'.
3. Return a single JSON object that maps each weapon's zero-indexed 'row,col' coordinate from the arsenal to its total count in the screenshot.
4. The keys of the JSON object must be strings in the format "row,col" (e.g., "0,0", "1,5").
5. The values must be integers representing the count.
6. If a weapon from the arsenal is not found in the screenshot, its count must be 0.
7. You must provide a count for all 18 weapon slots from the arsenal grid, even if the count is 0.
""".strip()


def grid_keys() -> list[str]:
    """All slot keys in row-major order: "0,0" .. "2,5"."""
    return [f"{r},{c}" for r in range(GRID_ROWS) for c in range(GRID_COLS)]


def build_response_schema() -> dict:
    """Object with one required INTEGER property per slot.

    Same shape is accepted by the google-genai SDK (``response_schema``)
    and the REST API (``generationConfig.responseSchema``).
    """
    properties = {
        key: {
            "type": "INTEGER",
            "description": (
                f"The total count of the weapon at grid coordinate "
                f"row {key.split(',')[0]}, column {key.split(',')[1]}."
            ),
        }
        for key in grid_keys()
    }
    return {
        "type": "OBJECT",
        "properties": properties,
        "required": grid_keys(),
    }


def parse_grid_count(text: str | None) -> dict[str, int]:
    if not text or not text.strip():
        raise InferenceFailure("empty model response")
    try:
        data = json.loads(text.strip())
    except json.JSONDecodeError as e:
        raise InferenceFailure(f"model response is not JSON: {e}") from e
    if not isinstance(data, dict):
        raise InferenceFailure(f"model response is not a JSON object: {type(data).__name__}")

    missing = [k for k in grid_keys() if k not in data]
    if missing:
        raise InferenceFailure(f"model response missing keys: {', '.join(missing)}")

    grid: dict[str, int] = {}
    for key, value in data.items():
        # bool is an int subclass; JSON true/false is not a count
        if isinstance(value, bool) or not isinstance(value, int):
            raise InferenceFailure(f"non-integer count for {key!r}: {value!r}")
        grid[key] = value
    return grid
