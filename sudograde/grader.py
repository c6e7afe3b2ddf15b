from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional, Set, Tuple

from .chains import find_bug_plus_one, find_simple_colouring, find_xy_chain, find_xyz_wing, find_y_wing
from .grid import EMPTY, ContradictionError, Grid, flatten, grid_to_string, init_candidates, parse_puzzle, unflatten
from .scoring import BACKTRACKING, TECHNIQUE_SCORES, density_factor, normalize, step_weight
from .search import backtrack
from .techniques import (
    Cands,
    Step,
    Technique,
    Values,
    apply_step,
    find_box_line_reduction,
    find_hidden_pair,
    find_hidden_quad,
    find_hidden_single,
    find_hidden_triple,
    find_jellyfish,
    find_naked_pair,
    find_naked_quad,
    find_naked_single,
    find_naked_triple,
    find_pointing_pairs,
    find_swordfish,
    find_unique_rectangle,
    find_x_wing,
)

Observer = Callable[[Step, Values, Cands], None]


def _technique(name: str, finder) -> Technique:
    return Technique(name, TECHNIQUE_SCORES[name], finder)


# Cheapest first. Propagation restarts from the top after every step.
TECHNIQUES: List[Technique] = [
    _technique("Naked Single", find_naked_single),
    _technique("Hidden Single", find_hidden_single),
    _technique("Pointing Pairs", find_pointing_pairs),
    _technique("Line/Box Reduction", find_box_line_reduction),
    _technique("Naked Pair", find_naked_pair),
    _technique("Hidden Pair", find_hidden_pair),
    _technique("Naked Triple", find_naked_triple),
    _technique("Hidden Triple", find_hidden_triple),
    _technique("Naked Quad", find_naked_quad),
    _technique("Hidden Quad", find_hidden_quad),
    _technique("X-Wing", find_x_wing),
    _technique("Swordfish", find_swordfish),
    _technique("Jellyfish", find_jellyfish),
    _technique("Unique Rectangle Type 1", find_unique_rectangle),
    _technique("Y-Wing", find_y_wing),
    _technique("XYZ-Wing", find_xyz_wing),
    _technique("XY-Chain", find_xy_chain),
    _technique("Simple Colouring", find_simple_colouring),
    _technique("BUG+1", find_bug_plus_one),
]


@dataclass(frozen=True)
class GradedResult:
    is_solvable: bool
    solution: Optional[Grid]
    difficulty: float
    techniques_used: FrozenSet[str]

    def to_json(self) -> Dict[str, object]:
        return {
            "isSolvable": self.is_solvable,
            "solution": grid_to_string(self.solution) if self.solution is not None else None,
            "difficulty": self.difficulty,
            "techniquesUsed": sorted(self.techniques_used),
        }


def unsolvable(techniques_used: Set[str]) -> GradedResult:
    return GradedResult(is_solvable=False, solution=None, difficulty=0.0, techniques_used=frozenset(techniques_used))


def propagate(
    values: Values,
    cands: Cands,
    observer: Optional[Observer] = None,
    used: Optional[Set[str]] = None,
) -> Tuple[float, Set[str]]:
    total = 0.0
    used = set() if used is None else used
    progressed = True
    while progressed and EMPTY in values:
        progressed = False
        factor = density_factor(cands)
        for tech in TECHNIQUES:
            step = tech.finder(values, cands)
            if step is None:
                continue
            try:
                changed = apply_step(step, values, cands)
            except ContradictionError:
                used.add(step.technique)
                raise
            if changed:
                total += step_weight(tech.score, factor, step.chain_length)
                used.add(step.technique)
                if observer is not None:
                    observer(step, values, cands)
                progressed = True
                break
    return total, used


def grade_puzzle(grid: Grid, observer: Optional[Observer] = None) -> GradedResult:
    values = flatten(grid)
    used: Set[str] = set()
    try:
        cands = init_candidates(values)
        total, _ = propagate(values, cands, observer, used)
    except ContradictionError:
        return unsolvable(used)

    if EMPTY in values:
        if not backtrack(values, cands):
            return unsolvable(used)
        used.add(BACKTRACKING)

    return GradedResult(
        is_solvable=True,
        solution=unflatten(values),
        difficulty=normalize(total),
        techniques_used=frozenset(used),
    )


def grade_string(puzzle: str) -> GradedResult:
    return grade_puzzle(parse_puzzle(puzzle))


def trace_puzzle(grid: Grid) -> List[Step]:
    steps: List[Step] = []
    grade_puzzle(grid, observer=lambda step, values, cands: steps.append(step))
    return steps
