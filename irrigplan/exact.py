"""Mixed-integer model of the irrigation plan solved to optimality."""

from __future__ import annotations

import enum

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, OptimizeResult, milp

from .instance import Instance
from .solution import Solution

_MILP_INFEASIBLE = 2


class Status(enum.Enum):
    """Outcome of the exact solver."""

    SOLUTION_FOUND = "solution found"
    INFEASIBLE = "infeasible"


class ExactSolver:
    """Minimum-cost schedule as a mixed-integer linear program.

    One binary variable per setting and day selects the setting, and two
    continuous variables per day hold the soil water at its start and end.
    """

    def __init__(self, instance: Instance, time_limit: float) -> None:
        self.instance = instance
        self.time_limit = time_limit
        self._result: OptimizeResult | None = None
        self._days = len(instance.cycle)
        self._settings = len(instance.perc)

    def _x(self, setting: int, day: int) -> int:
        return setting * self._days + day

    def _adf(self, day: int) -> int:
        return self._settings * self._days + day

    def _adi(self, day: int) -> int:
        return self._settings * self._days + self._days + day

    def _build(self):
        inst = self.instance
        days, settings = self._days, self._settings
        size = settings * days + 2 * days

        objective = np.zeros(size)
        for p in range(settings):
            for c in range(days):
                objective[self._x(p, c)] = inst.cost[p]

        integrality = np.zeros(size)
        integrality[: settings * days] = 1

        lower = np.zeros(size)
        upper = np.full(size, np.inf)
        upper[: settings * days] = 1.0

        rows, row_lb, row_ub = [], [], []

        def add(coeffs: dict[int, float], lo: float, hi: float) -> None:
            row = np.zeros(size)
            for index, value in coeffs.items():
                row[index] += value
            rows.append(row)
            row_lb.append(lo)
            row_ub.append(hi)

        for c in range(days):
            add({self._x(p, c): 1.0 for p in range(settings)}, 1.0, 1.0)
        if days:
            add({self._adi(0): 1.0}, inst.cad[0], inst.cad[0])
        for c in range(1, days):
            add({self._adi(c): 1.0, self._adf(c - 1): -1.0}, 0.0, 0.0)
        for c in range(days):
            coeffs = {self._adf(c): 1.0, self._adi(c): -1.0}
            for p in range(settings):
                coeffs[self._x(p, c)] = -inst.lamp[p]
            rhs = inst.prec[c] - inst.etc[c]
            add(coeffs, rhs, rhs)
        for c in range(days):
            add({self._adf(c): 1.0}, inst.lc[c], np.inf)

        constraints = LinearConstraint(np.array(rows), row_lb, row_ub)
        return objective, integrality, Bounds(lower, upper), constraints

    def solve(self) -> None:
        """Solve the model within the time limit."""
        objective, integrality, bounds, constraints = self._build()
        self._result = milp(
            objective,
            integrality=integrality,
            bounds=bounds,
            constraints=constraints,
            options={"time_limit": self.time_limit, "disp": False},
        )

    def _solved(self) -> OptimizeResult:
        if self._result is None:
            raise RuntimeError("the model has not been solved")
        return self._result

    def _values(self) -> np.ndarray:
        result = self._solved()
        if result.x is None:
            raise RuntimeError(f"no solution available: {result.message}")
        return result.x

    def status(self) -> Status:
        """Return INFEASIBLE when the model is infeasible, else SOLUTION_FOUND."""
        if self._solved().status == _MILP_INFEASIBLE:
            return Status.INFEASIBLE
        return Status.SOLUTION_FOUND

    def objective_value(self) -> float:
        """Return the optimal cost, or -1 when the model is infeasible."""
        if self.status() is Status.SOLUTION_FOUND:
            self._values()
            return float(self._solved().fun)
        return -1.0

    def solution(self) -> Solution:
        """Return the setting index chosen on each day."""
        values = self._values()
        choices = [
            p
            for c in range(self._days)
            for p in range(self._settings)
            if values[self._x(p, c)] >= 0.5
        ]
        return Solution(choices=choices)

    def format_solution(self) -> str:
        """Return the chosen setting indices as a one-line summary."""
        values = self._values()
        chosen = "".join(
            f"{p} "
            for c in range(self._days)
            for p in range(self._settings)
            if abs(values[self._x(p, c)] - 1.0) <= 1e-6
        )
        return f"Solution Output: [ {chosen}]"

    def water_balance(self) -> list[tuple[float, float, float]]:
        """Return, per day, the starting water, ending water and critical limit."""
        values = self._values()
        return [
            (float(values[self._adi(c)]), float(values[self._adf(c)]), self.instance.lc[c])
            for c in range(self._days)
        ]