"""
Server configuration.

Frozen dataclass loaded from environment variables, after reading a .env file
from the working directory. A real inference adapter without an API key is a
fatal startup error.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from arsenal_scan.orchestrator.errors import MissingCredential

ADAPTERS = ("gemini", "gemini_rest", "mock")

DEFAULT_REFERENCE_IMAGE = str(Path(__file__).resolve().parent.parent / "web" / "static" / "weaponsss.png")


@dataclass(frozen=True)
class Config:
    api_key: Optional[str]
    inference_adapter: str
    model: str
    base_url: str
    timeout: float
    reference_image: str

    @classmethod
    def load(cls, env_file: str | None = ".env") -> "Config":
        if env_file:
            load_dotenv(dotenv_path=env_file, override=False)

        adapter = os.getenv("INFERENCE_ADAPTER", "gemini").strip().lower()
        if adapter not in ADAPTERS:
            raise ValueError(f"INFERENCE_ADAPTER must be one of {', '.join(ADAPTERS)}, got {adapter!r}")

        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None
        if adapter != "mock" and not api_key:
            raise MissingCredential("GEMINI_API_KEY environment variable is not set")

        return cls(
            api_key=api_key,
            inference_adapter=adapter,
            model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            base_url=os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com"),
            timeout=float(os.getenv("GEMINI_TIMEOUT", "120")),
            reference_image=os.getenv("REFERENCE_IMAGE", DEFAULT_REFERENCE_IMAGE),
        )
