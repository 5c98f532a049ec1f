"""Cost evaluation and water-balance feasibility checks for schedules."""

from __future__ import annotations

import logging
import warnings

from .instance import Instance
from .solution import Solution

logger = logging.getLogger(__name__)

TOLERANCE = 0.0001


class Measurer:
    """Evaluates schedules against an instance."""

    def __init__(self, instance: Instance) -> None:
        self.instance = instance

    def _lamp(self, choice: int) -> float:
        if choice < 0:
            raise IndexError(f"setting index {choice} out of range")
        return self.instance.lamp[choice]

    def evaluate(self, solution: Solution) -> float:
        """Return the total cost of the schedule; unknown settings are skipped."""
        costs = self.instance.cost
        total = 0.0
        for choice in solution.choices:
            if 0 <= choice < len(costs):
                total += costs[choice]
            else:
                warnings.warn(
                    f"setting index {choice} out of bounds of the cost table",
                    RuntimeWarning,
                    stacklevel=2,
                )
        return total

    def validation(self, solution: Solution) -> bool:
        """Check that the soil water never falls below the critical limit."""
        inst = self.instance
        adi = inst.cad[0]
        for day, choice in enumerate(solution.choices):
            adf = adi - inst.etc[day] + inst.prec[day] + self._lamp(choice)
            if adf + TOLERANCE < inst.lc[day]:
                logger.warning(
                    "water below the critical limit on day %d: %.4f < %.4f "
                    "(precipitation %.4f)",
                    day,
                    adf,
                    inst.lc[day],
                    inst.prec[day],
                )
                return False
            adi = adf
        return True

    def validation_range(self, solution: Solution, start: int, end: int) -> bool:
        """Check days ``start``..``end`` inclusive and refresh their end water.

        The end-of-day water of the solution is updated only when the whole
        range is feasible.
        """
        choices = solution.choices
        if start < 0 or end >= len(choices) or start > end:
            return False
        inst = self.instance
        adf = list(solution.adf)
        if len(adf) < len(choices):
            adf.extend([0.0] * (len(choices) - len(adf)))
        adi = inst.cad[0] if start == 0 else adf[start - 1]
        for day in range(start, end + 1):
            value = adi - inst.etc[day] + inst.prec[day] + self._lamp(choices[day])
            if value + TOLERANCE < inst.lc[day]:
                return False
            adf[day] = value
            adi = value
        solution.adf = adf
        return True

    def evaluate_range(self, solution: Solution, start: int, end: int) -> float:
        """Return the cost of days ``start``..``end`` inclusive."""
        choices = solution.choices
        if start < 0 or end >= len(choices) or start > end:
            warnings.warn(
                f"invalid range [{start}, {end}] for solution of size {len(choices)}",
                RuntimeWarning,
                stacklevel=2,
            )
            return 0.0
        costs = self.instance.cost
        total = 0.0
        for position, choice in enumerate(choices[start : end + 1], start):
            if 0 <= choice < len(costs):
                total += costs[choice]
            else:
                warnings.warn(
                    f"setting index {choice} out of bounds of the cost table "
                    f"at position {position}",
                    RuntimeWarning,
                    stacklevel=2,
                )
        return total