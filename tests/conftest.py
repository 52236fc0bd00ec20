"""Shared pytest fixtures."""

import base64

import pytest

from arsenal_scan.orchestrator.grid import grid_keys
from arsenal_scan.services.status_store import StatusStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32 + b"\xff\xd9"


def make_grid(**hits: int) -> dict[str, int]:
    """All 18 slots at 0, with overrides given as r0c0=2 style kwargs."""
    grid = {key: 0 for key in grid_keys()}
    for name, count in hits.items():
        row, col = name[1], name[3]
        grid[f"{row},{col}"] = count
    return grid


@pytest.fixture()
def status() -> StatusStore:
    return StatusStore()


@pytest.fixture()
def arsenal_file(tmp_path):
    path = tmp_path / "weaponsss.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture()
def user_b64() -> str:
    return base64.standard_b64encode(JPEG_BYTES).decode("ascii")
