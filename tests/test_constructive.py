import math

import pytest

from irrigplan.constructive import FULL_CAPACITY_SETTING, ConstructiveHeuristic
from irrigplan.instance import Instance
from irrigplan.measurer import Measurer
from irrigplan.report import process_solution


def make_instance(days=4, prec=0.0, lc=5.0, cad=10.0):
    return Instance(
        cycle=[float(d + 1) for d in range(days)],
        perc=[0, 1, 2],
        cost=[1.0, 2.0, 3.0],
        lamp=[0.0, 5.0, 10.0],
        prec=[prec] * days,
        etc=[3.0] * days,
        cad=[cad] * days,
        lc=[lc] * days,
    )


def eleven_settings(days=3, prec=0.0):
    return Instance(
        cycle=[float(d + 1) for d in range(days)],
        perc=list(range(11)),
        cost=[float(i + 1) for i in range(11)],
        lamp=[float(i) for i in range(11)],
        prec=[prec] * days,
        etc=[3.0] * days,
        cad=[10.0] * days,
        lc=[5.0] * days,
    )


def test_execute_a_cheapest_feasible():
    sol = ConstructiveHeuristic(make_instance()).execute_a()
    assert sol.choices == [0, 1, 0, 1]


def test_execute_a_is_valid_and_consistent():
    inst = make_instance()
    sol = ConstructiveHeuristic(inst).execute_a()
    assert len(sol.choices) == len(inst.cycle)
    assert Measurer(inst).validation(sol)
    finals = [r.final_water for r in process_solution(inst, sol)]
    assert sol.adf == pytest.approx(finals)


def test_execute_a_no_feasible_setting_keeps_water():
    inst = make_instance(lc=1000.0)
    sol = ConstructiveHeuristic(inst).execute_a()
    assert sol.choices == []
    assert sol.adf == [inst.cad[0]] * len(inst.cycle)


def test_execute_b_full_capacity_days_use_setting_ten():
    inst = eleven_settings(prec=5.0)
    sol = ConstructiveHeuristic(inst).execute_b()
    assert sol.choices == [FULL_CAPACITY_SETTING] * len(inst.cycle)
    assert sol.adf == []


def test_execute_b_refills_to_capacity():
    inst = eleven_settings()
    sol = ConstructiveHeuristic(inst).execute_b()
    assert len(sol.choices) == len(inst.cycle)
    assert all(value >= inst.cad[0] for value in sol.adf)
    assert Measurer(inst).validation(sol)


def test_execute_c_stays_between_limit_and_capacity():
    inst = make_instance(days=6)
    sol = ConstructiveHeuristic(inst).execute_c()
    assert len(sol.choices) == len(inst.cycle)
    assert all(inst.lc[0] <= value <= inst.cad[0] for value in sol.adf)
    assert Measurer(inst).validation(sol)


def test_lookahead_depth_one_matches_greedy():
    inst = make_instance(days=5)
    heuristic = ConstructiveHeuristic(inst)
    assert heuristic.execute_lookahead(1) == heuristic.execute_a()


def test_lookahead_is_valid():
    inst = make_instance(days=5)
    sol = ConstructiveHeuristic(inst).execute_lookahead(3)
    assert Measurer(inst).validation(sol)
    assert len(sol.choices) == len(sol.adf) == len(inst.cycle)


def test_simulate_lookahead_bounds():
    heuristic = ConstructiveHeuristic(make_instance())
    assert heuristic.simulate_lookahead(4, 10.0, 3) == 0.0
    assert heuristic.simulate_lookahead(0, 10.0, 0) == 0.0


def test_simulate_lookahead_infeasible_is_infinite():
    heuristic = ConstructiveHeuristic(make_instance(lc=1000.0))
    result = heuristic.simulate_lookahead(0, 10.0, 2)
    assert result == math.inf


def test_simulate_lookahead_not_above_greedy_cost():
    inst = make_instance()
    heuristic = ConstructiveHeuristic(inst)
    greedy = Measurer(inst).evaluate(heuristic.execute_a())
    assert heuristic.simulate_lookahead(0, inst.cad[0], len(inst.cycle)) <= greedy