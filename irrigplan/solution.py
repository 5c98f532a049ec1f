"""Irrigation schedule: the sprinkler setting chosen per day and the water left."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Solution:
    """A schedule of sprinkler-setting indices with the end-of-day soil water.

    ``choices[d]`` is the index of the setting used on day ``d`` and
    ``adf[d]`` is the water available in the soil at the end of that day.
    """

    choices: list[int] = field(default_factory=list)
    adf: list[float] = field(default_factory=list)

    def copy(self) -> Solution:
        """Return an independent copy of this schedule."""
        return Solution(list(self.choices), list(self.adf))