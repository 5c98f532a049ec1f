import pytest

from irrigplan.instance import Instance
from irrigplan.measurer import Measurer
from irrigplan.mcts import MCTSRefiner
from irrigplan.report import process_solution
from irrigplan.solution import Solution

DAYS = 10


@pytest.fixture
def instance():
    settings = list(range(11))
    return Instance(
        cycle=[float(d + 1) for d in range(DAYS)],
        perc=settings,
        cost=[float(p) for p in settings],
        lamp=[float(p) for p in settings],
        prec=[0.0] * DAYS,
        etc=[1.0] * DAYS,
        cad=[20.0] * DAYS,
        lc=[5.0] * DAYS,
    )


def _schedule(instance, choices):
    solution = Solution(list(choices))
    results = process_solution(instance, solution)
    solution.adf = [r.final_water for r in results]
    return solution


def test_mcts_finds_cheaper_feasible_schedule(instance):
    root = _schedule(instance, [5] * DAYS)
    measurer = Measurer(instance)
    result = MCTSRefiner(instance, iterations=50, seed=1).execute_mcts(root)
    assert measurer.evaluate(result) < measurer.evaluate(root)
    assert measurer.validation(result)


def test_mcts_keeps_end_water_consistent(instance):
    root = _schedule(instance, [5] * DAYS)
    result = MCTSRefiner(instance, iterations=50, seed=3).execute_mcts(root)
    expected = [r.final_water for r in process_solution(instance, result)]
    assert result.adf == pytest.approx(expected)


def test_mcts_does_not_modify_root(instance):
    root = _schedule(instance, [5] * DAYS)
    snapshot = root.copy()
    MCTSRefiner(instance, iterations=30, seed=2).execute_mcts(root)
    assert root == snapshot


def test_mcts_zero_iterations_returns_root(instance):
    root = _schedule(instance, [4] * DAYS)
    result = MCTSRefiner(instance, iterations=0, seed=0).execute_mcts(root)
    assert result == root


def test_mcts_keeps_cheapest_schedule(instance):
    root = _schedule(instance, [0] * DAYS)
    result = MCTSRefiner(instance, iterations=40, seed=5).execute_mcts(root)
    assert result.choices == [0] * DAYS


def test_mcts_is_deterministic_with_seed(instance):
    root = _schedule(instance, [6] * DAYS)
    first = MCTSRefiner(instance, iterations=40, seed=9).execute_mcts(root)
    second = MCTSRefiner(instance, iterations=40, seed=9).execute_mcts(root)
    assert first == second


def test_execute_a_improves_and_stays_feasible(instance):
    root = _schedule(instance, [5] * DAYS)
    measurer = Measurer(instance)
    result = MCTSRefiner(instance, iterations=20, seed=4).execute_a(root)
    assert measurer.evaluate(result) < measurer.evaluate(root)
    assert measurer.validation(result)


def test_execute_a_empty_solution(instance):
    empty = Solution()
    result = MCTSRefiner(instance, iterations=10, seed=0).execute_a(empty)
    assert result.choices == []