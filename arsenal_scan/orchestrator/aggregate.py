from dataclasses import dataclass
from typing import Mapping

from arsenal_scan.orchestrator.weapons import UNDEFINED_WEAPON, WEAPON_MAP


@dataclass
class Summary:
    total_count: int
    unique_types: int
    text: str


def aggregate(grid: Mapping[str, int], weapon_map: Mapping[str, str] = WEAPON_MAP) -> dict[str, int]:
    """GridCount -> {weapon name: summed count}.

    Unmapped slots, the "undefined" slot and zero counts are dropped.
    Names keep the order in which they were first seen.
    """
    totals: dict[str, int] = {}
    for coord, count in grid.items():
        name = weapon_map.get(coord)
        if not name or name == UNDEFINED_WEAPON or count <= 0:
            continue
        totals[name] = totals.get(name, 0) + count
    return totals


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" + ("" if n == 1 else "s")


def summarize(aggregated: Mapping[str, int]) -> Summary:
    total = sum(aggregated.values())
    unique = len(aggregated)
    if not aggregated:
        text = "No matching weapons were identified in the screenshot."
    else:
        text = (
            f"Found a total of {_plural(total, 'weapon instance')} "
            f"across {_plural(unique, 'unique weapon type')}."
        )
    return Summary(total_count=total, unique_types=unique, text=text)
