"""Irrigation scheduling over a crop cycle with exact and heuristic methods."""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "constructive",
    "exact",
    "instance",
    "mcts",
    "measurer",
    "refinement",
    "report",
    "solution",
]