"""Greedy and look-ahead construction of irrigation schedules."""

from __future__ import annotations

import logging
import math

from .instance import Instance
from .solution import Solution

logger = logging.getLogger(__name__)

# Setting recorded for a day whose water already reaches the field capacity.
FULL_CAPACITY_SETTING = 10


class ConstructiveHeuristic:
    """Builds a schedule day by day from the instance data."""

    def __init__(self, instance: Instance) -> None:
        self.instance = instance

    def _base_water(self, day: int, adi: float) -> float:
        inst = self.instance
        return adi - inst.etc[day] + inst.prec[day]

    def execute_a(self) -> Solution:
        """Pick, each day, the cheapest setting that keeps water above the critical limit."""
        inst = self.instance
        choices: list[int] = []
        adf_values: list[float] = []
        adi = inst.cad[0]
        adf = 0.0
        for day in range(len(inst.cycle)):
            best_price = math.inf
            best_perc = -1
            for perc in inst.perc:
                candidate = self._base_water(day, adi) + inst.lamp[perc]
                price = inst.cost[perc]
                if price < best_price and candidate >= inst.lc[day]:
                    best_price = price
                    best_perc = perc
                    adf = candidate
            if best_perc != -1:
                choices.append(best_perc)
            else:
                adf = adi
            adi = adf
            adf_values.append(adf)
        return Solution(choices, adf_values)

    def execute_b(self) -> Solution:
        """Pick, each day, the cheapest setting that refills the soil to field capacity.

        Days already at field capacity without irrigation record setting 10
        and add no end-of-day water entry.
        """
        inst = self.instance
        choices: list[int] = []
        adf_values: list[float] = []
        adi = inst.cad[0]
        adf = 0.0
        for day in range(len(inst.cycle)):
            pre = self._base_water(day, adi)
            if pre >= inst.cad[day]:
                choices.append(FULL_CAPACITY_SETTING)
                adi = pre
                continue
            best_price = math.inf
            best_perc = -1
            candidate = 0.0
            for perc in inst.perc:
                candidate = pre + inst.lamp[perc]
                price = inst.cost[perc]
                if price < best_price and candidate >= inst.cad[day]:
                    best_price = price
                    best_perc = perc
                    adf = candidate
            if adf < inst.lc[day]:
                logger.error("day %d: water %f below the critical limit", day, candidate)
            if best_perc != -1:
                choices.append(best_perc)
            else:
                adf = adi
            adi = adf
            adf_values.append(adf)
        return Solution(choices, adf_values)

    def execute_c(self) -> Solution:
        """Pick, each day, the last setting that keeps water between the limit and capacity."""
        inst = self.instance
        choices: list[int] = []
        adf_values: list[float] = []
        adi = inst.cad[0]
        adf = 0.0
        for day in range(len(inst.cycle)):
            pre = self._base_water(day, adi)
            best_perc = -1
            for perc in inst.perc:
                candidate = pre + inst.lamp[perc]
                if inst.lc[day] <= candidate <= inst.cad[day]:
                    best_perc = perc
                    adf = candidate
            if adf < inst.lc[day]:
                logger.error("day %d: water %f below the critical limit", day, adf)
            if best_perc != -1:
                choices.append(best_perc)
            else:
                adf = adi
            adi = adf
            adf_values.append(adf)
        return Solution(choices, adf_values)

    def execute_lookahead(self, depth: int) -> Solution:
        """Pick, each day, the setting minimising its cost plus a look-ahead estimate."""
        inst = self.instance
        choices: list[int] = []
        adf_values: list[float] = []
        adi = inst.cad[0]
        for day in range(len(inst.cycle)):
            best_score = math.inf
            best_perc = -1
            best_adf = adi
            for perc in inst.perc:
                current = self._base_water(day, adi) + inst.lamp[perc]
                if current >= inst.lc[day]:
                    score = inst.cost[perc] + self.simulate_lookahead(day + 1, current, depth - 1)
                    if score < best_score:
                        best_score = score
                        best_perc = perc
                        best_adf = current
            if best_perc != -1:
                choices.append(best_perc)
                adf = best_adf
            else:
                adf = adi
            adi = adf
            adf_values.append(adf)
        return Solution(choices, adf_values)

    def simulate_lookahead(self, day: int, adi: float, depth: int) -> float:
        """Return the cheapest cost of the next ``depth`` days from water ``adi``.

        Returns infinity when no setting keeps the water above the limit.
        """
        inst = self.instance
        if day >= len(inst.cycle) or depth == 0:
            return 0.0
        pre = self._base_water(day, adi)
        best = math.inf
        if pre >= inst.cad[day]:
            best = self.simulate_lookahead(day + 1, pre, depth - 1)
        for perc in inst.perc:
            candidate = pre + inst.lamp[perc]
            if candidate >= inst.lc[day]:
                future = self.simulate_lookahead(day + 1, candidate, depth - 1)
                best = min(best, inst.cost[perc] + future)
        return best