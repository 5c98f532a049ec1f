"""Local-search refinement of irrigation schedules."""

from __future__ import annotations

import math
import random
from collections.abc import Iterator, Sequence

from .instance import Instance
from .measurer import TOLERANCE, Measurer
from .solution import Solution

BLOCK_LEN = 7


def _ordered_permutations(values: Sequence[int]) -> Iterator[list[int]]:
    """Yield the distinct permutations of ``values`` in lexicographic order."""
    items = sorted(values)
    yield list(items)
    size = len(items)
    while True:
        pivot = size - 2
        while pivot >= 0 and items[pivot] >= items[pivot + 1]:
            pivot -= 1
        if pivot < 0:
            return
        successor = size - 1
        while items[successor] <= items[pivot]:
            successor -= 1
        items[pivot], items[successor] = items[successor], items[pivot]
        items[pivot + 1 :] = reversed(items[pivot + 1 :])
        yield list(items)


class RefinementHeuristic:
    """Improves an existing schedule by neighbourhood search and annealing."""

    def __init__(self, instance: Instance, seed: int | None = None) -> None:
        self.instance = instance
        self.rng = random.Random(seed)

    def execute_b(self, solution: Solution) -> Solution:
        """Search sliding windows of seven days, restarting after every improvement."""
        total = len(solution.choices)
        if total < BLOCK_LEN:
            return solution
        measurer = Measurer(self.instance)
        max_blocks = total - BLOCK_LEN + 1
        k = 1
        while k <= max_blocks:
            start = k - 1
            end = start + BLOCK_LEN - 1
            candidate = self.find_best_neighbor(solution, start, end)
            if measurer.evaluate(candidate) < measurer.evaluate(solution):
                solution = candidate
                k = 1
            else:
                k += 1
        return solution

    def find_best_neighbor(self, solution: Solution, start: int, end: int) -> Solution:
        """Return the cheapest feasible reordering of days ``start``..``end``.

        The original schedule, copied, is returned when no reordering is
        strictly cheaper or the range is invalid.
        """
        best = solution.copy()
        size = len(solution.choices)
        if size == 0 or start < 0 or end >= size or start > end:
            return best
        measurer = Measurer(self.instance)
        best_cost = measurer.evaluate(solution)
        window = solution.choices[start : end + 1]
        for arrangement in _ordered_permutations(window):
            candidate = solution.copy()
            candidate.choices[start : end + 1] = arrangement
            if measurer.validation_range(candidate, start, end):
                cost = measurer.evaluate(candidate)
                if cost < best_cost:
                    best = candidate
                    best_cost = cost
        return best

    def execute_sa(
        self,
        solution: Solution,
        t: float = 1000.0,
        t_min: float = 1e-3,
        alpha: float = 0.97,
        iter_per_t: int = 1000,
    ) -> Solution:
        """Simulated annealing over single-day setting changes."""
        if t > t_min and not 0.0 < alpha < 1.0:
            raise ValueError(f"cooling factor must lie strictly between 0 and 1, got {alpha}")
        size = len(solution.adf)
        if size == 0:
            return solution
        inst = self.instance
        measurer = Measurer(inst)
        current_cost = measurer.evaluate(solution)
        t_initial = t
        settings = len(inst.perc)
        max_perturbation = max(1, int(settings * 0.1))
        while t > t_min:
            ratio = t / t_initial
            level = max(1, int(max_perturbation * ratio))
            for _ in range(iter_per_t):
                day = self.rng.randint(0, size - 1)
                step = self.rng.randint(-level, level)
                old = solution.choices[day]
                new = max(0, min(old + step, settings - 1))
                if new == old:
                    continue
                candidate = solution.copy()
                candidate.choices[day] = new
                self.propagate(candidate, day, inst.lamp[new] - inst.lamp[old])
                if not self.is_feasible(candidate, day):
                    continue
                cost = measurer.evaluate(candidate)
                delta = cost - current_cost
                if delta < 0 or self.rng.random() < math.exp(-delta / t):
                    solution = candidate
                    current_cost = cost
            t *= alpha
        return solution

    def propagate(self, solution: Solution, day: int, delta: float) -> None:
        """Add ``delta`` to the end-of-day water from ``day`` to the end."""
        if not 0 <= day < len(solution.adf):
            return
        solution.adf[day:] = [value + delta for value in solution.adf[day:]]

    def is_feasible(self, solution: Solution, day: int) -> bool:
        """Check that the water stays above the critical limit from ``day`` onward.

        The water entering ``day`` is taken from the stored end water of the
        previous day, or from the field capacity on the first day.
        """
        inst = self.instance
        adf = solution.adf
        choices = solution.choices
        if day < 0 or not adf or not choices or len(adf) < day:
            return False
        if day == 0:
            if not inst.cad:
                return False
            adi = inst.cad[0]
        else:
            adi = adf[day - 1]
        for current in range(day, len(adf)):
            if (
                current >= len(inst.etc)
                or current >= len(inst.prec)
                or current >= len(inst.lc)
                or current >= len(choices)
            ):
                return False
            choice = choices[current]
            if not 0 <= choice < len(inst.lamp):
                return False
            value = adi - inst.etc[current] + inst.prec[current] + inst.lamp[choice]
            if value + TOLERANCE < inst.lc[current]:
                return False
            adi = value
        return True