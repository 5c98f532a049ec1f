"""Day-by-day water balance of a schedule and its export to CSV."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from dataclasses import astuple, dataclass
from pathlib import Path

from .instance import Instance
from .solution import Solution

CSV_HEADER = (
    "Data",
    "CAD",
    "LC",
    "Agua Inicial",
    "ETC",
    "Precipitacao",
    "Irrigacao",
    "Agua Final",
    "Excesso",
)

NO_IRRIGATION = 8


@dataclass
class DayResult:
    """Water balance of a single day."""

    date: str
    cad: float
    lc: float
    initial_water: float
    etc: float
    precipitation: float
    irrigation: float
    final_water: float
    excess: float


def process_solution(instance: Instance, solution: Solution) -> list[DayResult]:
    """Replay the schedule over the whole cycle and report each day.

    Days beyond the end of the schedule, and days using setting 8, get no
    irrigation.
    """
    results = []
    initial = instance.cad[0]
    for day, label in enumerate(instance.cycle):
        choice = solution.choices[day] if day < len(solution.choices) else NO_IRRIGATION
        irrigation = 0.0 if choice == NO_IRRIGATION else instance.lamp[choice]
        final = initial - instance.etc[day] + instance.prec[day] + irrigation
        results.append(
            DayResult(
                date=f"{label:f}",
                cad=instance.cad[day],
                lc=instance.lc[day],
                initial_water=initial,
                etc=instance.etc[day],
                precipitation=instance.prec[day],
                irrigation=irrigation,
                final_water=final,
                excess=final - instance.lc[day],
            )
        )
        initial = final
    return results


def _format(value: object) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def export_csv(results: Iterable[DayResult], path: str | Path) -> None:
    """Write the day results to ``path`` as CSV with a header row."""
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for result in results:
            writer.writerow([_format(value) for value in astuple(result)])