"""Monte Carlo tree search refinement of irrigation schedules."""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable

from .instance import Instance
from .measurer import Measurer
from .refinement import BLOCK_LEN, RefinementHeuristic
from .solution import Solution

logger = logging.getLogger(__name__)

MAX_CHILDREN = 8
MAX_TREE_DEPTH = 50
EXPANSION_ATTEMPTS = 10
HIGH_SETTING = 10
MAX_EXPLORATION = 3.0


@dataclass(eq=False)
class MCTSNode:
    """A node of the search tree holding one schedule and its statistics."""

    sol: Solution
    parent: MCTSNode | None = None
    children: list[MCTSNode] = field(default_factory=list)
    w: float = 0.0
    n: int = 0
    fully_expanded: bool = False


def _is_reducible(level: int) -> bool:
    return 2 < level < HIGH_SETTING


def _is_low(level: int) -> bool:
    return level <= 2 or level == HIGH_SETTING


class MCTSRefiner:
    """Improves a schedule by a tree search that lowers irrigation levels."""

    def __init__(
        self,
        instance: Instance,
        c: float = 1.4142,
        iterations: int = 1000,
        rollout_depth: int = 20,
        seed: int | None = None,
    ) -> None:
        self.instance = instance
        self.c = c
        self.iterations = iterations
        self.rollout_depth = rollout_depth
        self._local = RefinementHeuristic(instance, seed)
        self.rng = self._local.rng
        self.irrigation_frequency: Counter[int] = Counter()

    def execute_a(self, solution: Solution) -> Solution:
        """Repeat the tree search block by block, restarting after every improvement."""
        total = len(solution.choices)
        if total == 0:
            return solution
        blocks = -(-total // BLOCK_LEN)
        measurer = Measurer(self.instance)
        k = 1
        while k <= blocks:
            candidate = self.execute_mcts(solution)
            if measurer.evaluate(candidate) < measurer.evaluate(solution):
                solution = candidate
                k = 1
            else:
                k += 1
        return solution

    def execute_mcts(self, root_solution: Solution) -> Solution:
        """Run the tree search from ``root_solution`` and return the cheapest schedule seen."""
        measurer = Measurer(self.instance)
        best = root_solution.copy()
        best_cost = measurer.evaluate(root_solution)
        root = MCTSNode(root_solution.copy())
        self.irrigation_frequency = Counter()

        for it in range(self.iterations):
            if (it + 1) % 500 == 0:
                logger.info("iteration %d/%d - best cost: %g", it + 1, self.iterations, best_cost)
            node = self._tree_policy(root)
            if node is None:
                break
            reward = self._default_policy(node.sol)
            self._backup(node, reward)
            cost = measurer.evaluate(node.sol)
            if cost < best_cost:
                best_cost = cost
                best = node.sol.copy()
            if it > 0 and it % 1000 == 0:
                self.c = min(self.c * 1.1, MAX_EXPLORATION)
        return best

    def _set_level(self, solution: Solution, day: int, level: int) -> None:
        lamp = self.instance.lamp
        old = solution.choices[day]
        solution.choices[day] = level
        self._local.propagate(solution, day, lamp[level] - lamp[old])

    def _tree_policy(self, node: MCTSNode | None) -> MCTSNode | None:
        depth = 0
        while node is not None and depth < MAX_TREE_DEPTH:
            if not node.fully_expanded:
                return self._expand(node)
            node = self._best_child(node, self.c)
            if node is None:
                break
            depth += 1
        return node

    def _best_child(self, node: MCTSNode, c: float) -> MCTSNode | None:
        best = None
        best_score = -math.inf
        for child in node.children:
            if child.n > 0:
                score = child.w / child.n + c * math.sqrt(math.log(node.n) / child.n)
                if score > best_score:
                    best_score = score
                    best = child
        return best

    def _is_valid_candidate(self, candidate: Solution, original: Solution) -> bool:
        differs = any(a != b for a, b in zip(candidate.choices, original.choices))
        return differs and self._local.is_feasible(candidate, 0)

    def _expansion_strategies(self, base: Solution) -> list[Callable[[], Solution]]:
        days = len(base.adf)
        high_days = [day for day in range(days) if _is_reducible(base.choices[day])]
        measurer = Measurer(self.instance)

        def reduce_high() -> Solution:
            cand = base.copy()
            if high_days:
                day = self.rng.choice(high_days)
                self._set_level(cand, day, self.rng.randint(0, 2))
            return cand

        def low_sequence() -> Solution:
            cand = base.copy()
            start = self.rng.randint(0, max(0, days - 5))
            level = self.rng.randint(1, 2)
            length = self.rng.randint(3, 5)
            for day in range(start, min(start + length, days)):
                self._set_level(cand, day, level)
            return cand

        def step_down() -> Solution:
            cand = base.copy()
            day = self.rng.randint(0, days - 1)
            current = cand.choices[day]
            if current > 2:
                self._set_level(cand, day, max(0, current - self.rng.randint(1, 5)))
            return cand

        def replace_high() -> Solution:
            cand = base.copy()
            for day in range(days):
                if cand.choices[day] != HIGH_SETTING:
                    continue
                best_cost = math.inf
                best_temp = None
                for level in (1, 2):
                    temp = cand.copy()
                    self._set_level(temp, day, level)
                    if self._local.is_feasible(temp, day):
                        cost = measurer.evaluate(temp)
                        if cost < best_cost:
                            best_cost = cost
                            best_temp = temp
                if best_temp is not None:
                    return best_temp
            return cand

        return [reduce_high, low_sequence, step_down, replace_high]

    def _expand(self, node: MCTSNode) -> MCTSNode:
        base = node.sol
        if not base.adf:
            return node
        strategies = self._expansion_strategies(base)
        for _ in range(EXPANSION_ATTEMPTS):
            if len(node.children) >= MAX_CHILDREN:
                break
            candidate = self.rng.choice(strategies)()
            if self._is_valid_candidate(candidate, base):
                child = MCTSNode(candidate, node)
                node.children.append(child)
                if len(node.children) >= MAX_CHILDREN:
                    node.fully_expanded = True
                return child
        node.fully_expanded = True
        return node

    def _default_policy(self, solution: Solution) -> float:
        measurer = Measurer(self.instance)
        sim = solution.copy()
        initial_cost = measurer.evaluate(sim)
        days = len(sim.adf)
        if days == 0:
            return -initial_cost

        high_days = [day for day in range(days) if _is_reducible(solution.choices[day])]
        improvements = 0
        for _ in range(min(self.rollout_depth, len(high_days))):
            if not high_days:
                break
            index = self.rng.randrange(len(high_days))
            day = high_days.pop(index)
            levels = [0, 1, 2]
            self.rng.shuffle(levels)
            for level in levels:
                if sim.choices[day] == level:
                    continue
                candidate = sim.copy()
                self._set_level(candidate, day, level)
                if not self._local.is_feasible(candidate, day):
                    continue
                if measurer.evaluate(candidate) <= initial_cost * 1.05:
                    sim = candidate
                    improvements += 1
                    self.irrigation_frequency[level] += 1
                    break

        final_cost = measurer.evaluate(sim)
        improvement = (initial_cost - final_cost) / initial_cost if initial_cost else 0.0
        return improvement + improvements * 0.1 + self._pattern_bonus(sim)

    @staticmethod
    def _pattern_bonus(solution: Solution) -> float:
        choices = solution.choices
        if not choices:
            return 0.0
        run = longest = low_count = 0
        for level in choices:
            if _is_low(level):
                run += 1
                low_count += 1
                longest = max(longest, run)
            else:
                run = 0
        return longest * 0.02 + low_count / len(choices) * 0.5

    @staticmethod
    def _backup(node: MCTSNode | None, reward: float) -> None:
        while node is not None:
            node.n += 1
            node.w += reward
            node = node.parent