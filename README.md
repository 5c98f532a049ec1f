# irrigplan

Plan which irrigation setting to use on each day of a crop cycle so that the
soil water never drops below its critical limit, at the lowest total cost.

Each day the water available at the end of the day is

    final = initial - evapotranspiration + precipitation + irrigation depth

and the first day starts at the soil's available water capacity (CAD of the
first day). Each irrigation setting delivers a known water depth at a known
cost. A schedule picks one setting index per day.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Command line

    irrigplan path/to/planilha.xlsx --time-limit 600

The workbook defaults to `../datasource/planilha.xlsx` and the time limit of
the exact solver to 3600 seconds. The command:

1. solves the exact model and prints `Solucao encontrada!`, its objective
   value and the chosen settings, or `Verificar!!!` when no solution is
   available;
2. prints the cost and settings of that exact schedule;
3. builds a schedule with `ConstructiveHeuristic.execute_c`, checks it
   against the critical limits and prints its validity, the number of days,
   its cost and its settings.

It returns 1 and prints an error when the workbook cannot be read.

## Input workbook

`Instance.from_xlsx` (or `load_instance`) reads an `.xlsx` file directly,
with no spreadsheet library:

- sheet `ciclo`, rows 2 to 121: column A day label, B precipitation,
  C evapotranspiration, D available water capacity (CAD), E critical limit;
- sheet `perc`, rows 2 to 12: column C water depth, D cost, E setting index.

A missing sheet, an empty cell or a non-numeric value raises `ValueError`.
An `Instance` can also be built directly from lists.

## Modules

- `irrigplan.solution` — `Solution`: `choices` (setting index per day) and
  `adf` (end-of-day water), with `copy()`.
- `irrigplan.instance` — `Instance` and `load_instance`.
- `irrigplan.measurer` — `Measurer`: `evaluate` (total cost; indices outside
  the cost table are skipped with a `RuntimeWarning`), `validation` (water
  stays above the critical limit, within a tolerance of 0.0001),
  `validation_range` and `evaluate_range` for an inclusive range of days.
  `validation_range` rewrites `adf` over the range only when it is feasible.
- `irrigplan.constructive` — `ConstructiveHeuristic` with greedy schedules
  `execute_a`, `execute_b`, `execute_c`, and `execute_lookahead(depth)`
  built on `simulate_lookahead`.
- `irrigplan.exact` — `ExactSolver(instance, time_limit)` builds the
  mixed-integer model and solves it with SciPy's `milp`. After `solve()`:
  `status()` (a `Status`), `objective_value()` (-1 when infeasible),
  `solution()`, `format_solution()` and `water_balance()` (start water,
  end water and critical limit per day). Calling them before `solve()`
  raises `RuntimeError`.
- `irrigplan.refinement` — `RefinementHeuristic(instance, seed=None)`:
  `execute_b` (best reordering of each sliding seven-day window,
  restarting after every improvement), `find_best_neighbor`, `execute_sa`
  (simulated annealing), `propagate` and `is_feasible`.
- `irrigplan.mcts` — `MCTSRefiner(instance, c=1.4142, iterations=1000,
  rollout_depth=20, seed=None)` with `execute_mcts` and `execute_a`, and the
  tree node `MCTSNode`. Progress is logged every 500 iterations.
- `irrigplan.report` — `process_solution` replays a schedule over the whole
  cycle into `DayResult` rows (days past the end of the schedule, and
  setting 8, get no irrigation); `export_csv` writes them with the header
  `Data,CAD,LC,Agua Inicial,ETC,Precipitacao,Irrigacao,Agua Final,Excesso`.
- `irrigplan.cli` — the `irrigplan` command (`main`).

## Library use

    from irrigplan.instance import load_instance
    from irrigplan.measurer import Measurer
    from irrigplan.constructive import ConstructiveHeuristic
    from irrigplan.refinement import RefinementHeuristic
    from irrigplan.report import process_solution, export_csv

    instance = load_instance("planilha.xlsx")
    schedule = ConstructiveHeuristic(instance).execute_a()
    schedule = RefinementHeuristic(instance, seed=1).execute_b(schedule)

    measurer = Measurer(instance)
    print(measurer.validation(schedule), measurer.evaluate(schedule))

    export_csv(process_solution(instance, schedule), "result.csv")

## What it does not do

The `irrigplan` command does not run the refinement heuristics or the tree
search and does not write a CSV report; use the library for those. There is
no plotting and no storage of results beyond `export_csv`.