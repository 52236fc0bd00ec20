ERR_BUSY = "BUSY"
ERR_INPUT_MISSING = "INPUT_MISSING"
ERR_ASSET_LOAD = "ASSET_LOAD_FAILED"
ERR_INFERENCE = "INFERENCE_FAILED"

# User-facing text for each error code; underlying causes only go to the status log
MESSAGES: dict[str, str] = {
    ERR_BUSY: "An analysis is already in progress. Please wait for it to finish.",
    ERR_INPUT_MISSING: "Please upload an image first.",
    ERR_ASSET_LOAD: (
        "Could not load the core weapon data. "
        "Please check that the arsenal image is accessible and restart the server."
    ),
    ERR_INFERENCE: (
        "An error occurred during analysis. The AI model might be unavailable. "
        "Please try again later."
    ),
}


class AssetLoadFailure(Exception):
    """Reference (arsenal) image could not be read."""


class InferenceFailure(Exception):
    """Model call failed or returned something that is not a GridCount."""

    def __init__(self, message: str = "Failed to get a valid response from the AI model."):
        super().__init__(message)


class MissingCredential(RuntimeError):
    """No API key configured for a real inference adapter. Fatal at startup."""
