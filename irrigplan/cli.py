"""Command line entry point: solve an instance exactly and heuristically."""

from __future__ import annotations

import argparse
import sys
import zipfile
from collections.abc import Sequence

from .constructive import ConstructiveHeuristic
from .exact import ExactSolver, Status
from .instance import Instance
from .measurer import Measurer
from .solution import Solution

DEFAULT_WORKBOOK = "../datasource/planilha.xlsx"
DEFAULT_TIME_LIMIT = 3600.0
RULE = "-" * 63


def _num(value: float) -> str:
    return f"{value:g}"


def _choices(solution: Solution) -> str:
    return "[ " + "".join(f"{value} " for value in solution.choices) + "]"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="irrigplan",
        description="Plan the irrigation of a crop cycle at minimum cost.",
    )
    parser.add_argument("workbook", nargs="?", default=DEFAULT_WORKBOOK, help="instance workbook")
    parser.add_argument(
        "--time-limit",
        type=float,
        default=DEFAULT_TIME_LIMIT,
        help="time limit of the exact solver in seconds",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the exact solver and the constructive heuristic and report both."""
    args = _parser().parse_args(argv)
    try:
        instance = Instance.from_xlsx(args.workbook)
    except (OSError, ValueError, KeyError, zipfile.BadZipFile) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    exact_solution = Solution()
    solver = ExactSolver(instance, args.time_limit)
    solver.solve()
    try:
        found = solver.status() is Status.SOLUTION_FOUND
        if found:
            objective = solver.objective_value()
            summary = solver.format_solution()
            exact_solution = solver.solution()
    except RuntimeError:
        found = False
    if found:
        print("Solucao encontrada!")
        print(f"FO: {_num(objective)}")
        print(summary)
    else:
        print("Verificar!!!")

    measurer = Measurer(instance)
    print()
    print(RULE)
    print(f"Solution Cost (Exato): R${_num(measurer.evaluate(exact_solution))}")
    print()
    print(RULE)
    print("Heuristics Evaluation:")
    print(f"Caixa Preta Solution Output: {_choices(exact_solution)}")
    print(RULE)

    solution = ConstructiveHeuristic(instance).execute_c()
    verdict = "is valid" if measurer.validation(solution) else "is invalid"
    print(f"Solution validation: {verdict}")
    print(f"Total day evaluated: {len(instance.cycle)}")
    print(f"Solution Cost: R${_num(measurer.evaluate(solution))}")
    print(f"Solution Output: {_choices(solution)}")
    print(RULE)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())