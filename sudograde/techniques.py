import itertools
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple

from .grid import (
    BOX_UNITS,
    COL_UNITS,
    DIGITS,
    EMPTY,
    PEERS,
    ROW_UNITS,
    ContradictionError,
    Idx,
    box_of,
    cell_name,
    idx_to_rc,
    rc_to_idx,
)

Values = List[int]
Cands = List[Set[int]]


@dataclass
class Step:
    technique: str
    fills: List[Tuple[Idx, int]] = field(default_factory=list)
    eliminations: List[Tuple[Idx, int]] = field(default_factory=list)
    chain_length: int = 0
    note: str = ""


@dataclass
class Technique:
    name: str
    score: int
    finder: Callable[[Values, Cands], Optional[Step]]


def apply_step(step: Step, values: Values, cands: Cands) -> bool:
    changed = False

    for idx, d in step.eliminations:
        if values[idx] != EMPTY:
            continue
        if d in cands[idx]:
            cands[idx].discard(d)
            changed = True
            if not cands[idx]:
                raise ContradictionError(f"candidate wipeout at {cell_name(idx)}")

    for idx, v in step.fills:
        if values[idx] != EMPTY:
            if values[idx] != v:
                raise ContradictionError(f"conflicting fill at {cell_name(idx)}")
            continue
        if v not in cands[idx]:
            raise ContradictionError(f"invalid fill {v} at {cell_name(idx)}")
        values[idx] = v
        cands[idx] = set()
        changed = True
        for p in PEERS[idx]:
            if values[p] == EMPTY and v in cands[p]:
                cands[p].discard(v)
                if not cands[p]:
                    raise ContradictionError(f"candidate wipeout at {cell_name(p)}")

    return changed


def positions(values: Values, cands: Cands, unit: List[Idx], d: int) -> List[Idx]:
    return [idx for idx in unit if values[idx] == EMPTY and d in cands[idx]]


def line_units(i: int) -> Tuple[List[Idx], List[Idx], List[Idx]]:
    return ROW_UNITS[i], COL_UNITS[i], BOX_UNITS[i]


def place(values: Values, cands: Cands, idx: Idx, v: int) -> None:
    values[idx] = v
    cands[idx] = set()
    for p in PEERS[idx]:
        cands[p].discard(v)


def find_naked_single(values: Values, cands: Cands) -> Optional[Step]:
    # placements land on a scratch copy so later cells see earlier fills
    values, cands = list(values), [set(c) for c in cands]
    fills: List[Tuple[Idx, int]] = []
    for idx in range(81):
        if values[idx] == EMPTY and len(cands[idx]) == 1:
            v = next(iter(cands[idx]))
            place(values, cands, idx, v)
            fills.append((idx, v))
    if fills:
        return Step("Naked Single", fills=fills, note=f"{cell_name(fills[0][0])}={fills[0][1]}")
    return None


def find_hidden_single(values: Values, cands: Cands) -> Optional[Step]:
    values, cands = list(values), [set(c) for c in cands]
    fills: List[Tuple[Idx, int]] = []
    for d in DIGITS:
        for i in range(9):
            row, col, box = line_units(i)
            spots = positions(values, cands, row, d)
            if len(spots) == 1:
                place(values, cands, spots[0], d)
                fills.append((spots[0], d))
                continue
            spots = positions(values, cands, col, d)
            if len(spots) == 1:
                place(values, cands, spots[0], d)
                fills.append((spots[0], d))
                continue
            spots = positions(values, cands, box, d)
            if len(spots) == 1:
                fills.append((spots[0], d))
                return Step("Hidden Single", fills=fills)
    if fills:
        return Step("Hidden Single", fills=fills)
    return None


def find_pointing_pairs(values: Values, cands: Cands) -> Optional[Step]:
    for d in DIGITS:
        for b, box in enumerate(BOX_UNITS):
            spots = positions(values, cands, box, d)
            if not 2 <= len(spots) <= 3:
                continue
            rows = {idx_to_rc(i)[0] for i in spots}
            cols = {idx_to_rc(i)[1] for i in spots}

            if len(rows) == 1:
                row = next(iter(rows))
                elims = [(idx, d) for idx in ROW_UNITS[row] if idx not in box and d in cands[idx]]
                if elims:
                    return Step("Pointing Pairs", eliminations=elims, note=f"box {b+1} digit {d} points along r{row+1}")

            if len(cols) == 1:
                col = next(iter(cols))
                elims = [(idx, d) for idx in COL_UNITS[col] if idx not in box and d in cands[idx]]
                if elims:
                    return Step("Pointing Pairs", eliminations=elims, note=f"box {b+1} digit {d} points along c{col+1}")
    return None


def find_box_line_reduction(values: Values, cands: Cands) -> Optional[Step]:
    for d in DIGITS:
        for i in range(9):
            for line in (ROW_UNITS[i], COL_UNITS[i]):
                spots = positions(values, cands, line, d)
                if not 2 <= len(spots) <= 3:
                    continue
                boxes = {box_of(idx) for idx in spots}
                if len(boxes) != 1:
                    continue
                box = BOX_UNITS[next(iter(boxes))]
                elims = [(idx, d) for idx in box if idx not in line and d in cands[idx]]
                if elims:
                    return Step("Line/Box Reduction", eliminations=elims)
    return None


def find_naked_subset(values: Values, cands: Cands, n: int, name: str) -> Optional[Step]:
    for i in range(9):
        for unit in line_units(i):
            cells = [idx for idx in unit if values[idx] == EMPTY and 2 <= len(cands[idx]) <= n]
            if len(cells) < n:
                continue
            for combo in itertools.combinations(cells, n):
                union = set().union(*(cands[idx] for idx in combo))
                if len(union) != n:
                    continue
                elims = [(idx, d) for idx in unit if idx not in combo for d in sorted(union & cands[idx])]
                if elims:
                    return Step(name, eliminations=elims, note=" ".join(cell_name(idx) for idx in combo))
    return None


def find_hidden_subset(values: Values, cands: Cands, n: int, name: str) -> Optional[Step]:
    for i in range(9):
        for unit in line_units(i):
            spots_by_digit: Dict[int, List[Idx]] = {}
            for d in DIGITS:
                spots = positions(values, cands, unit, d)
                if 2 <= len(spots) <= n:
                    spots_by_digit[d] = spots
            if len(spots_by_digit) < n:
                continue
            for digits_combo in itertools.combinations(spots_by_digit, n):
                union = set().union(*(spots_by_digit[d] for d in digits_combo))
                if len(union) != n:
                    continue
                allowed = set(digits_combo)
                elims = [(idx, d) for idx in sorted(union) for d in sorted(cands[idx] - allowed)]
                if elims:
                    return Step(name, eliminations=elims, note=f"digits {''.join(map(str, digits_combo))}")
    return None


def find_naked_pair(values: Values, cands: Cands) -> Optional[Step]:
    return find_naked_subset(values, cands, 2, "Naked Pair")


def find_hidden_pair(values: Values, cands: Cands) -> Optional[Step]:
    return find_hidden_subset(values, cands, 2, "Hidden Pair")


def find_naked_triple(values: Values, cands: Cands) -> Optional[Step]:
    return find_naked_subset(values, cands, 3, "Naked Triple")


def find_hidden_triple(values: Values, cands: Cands) -> Optional[Step]:
    return find_hidden_subset(values, cands, 3, "Hidden Triple")


def find_naked_quad(values: Values, cands: Cands) -> Optional[Step]:
    return find_naked_subset(values, cands, 4, "Naked Quad")


def find_hidden_quad(values: Values, cands: Cands) -> Optional[Step]:
    return find_hidden_subset(values, cands, 4, "Hidden Quad")


def find_fish(values: Values, cands: Cands, d: int, n: int, name: str, by_rows: bool) -> Optional[Step]:
    def cell(line: int, pos: int) -> Idx:
        return rc_to_idx(line, pos) if by_rows else rc_to_idx(pos, line)

    lines: List[Tuple[int, Set[int]]] = []
    for line in range(9):
        spots = {pos for pos in range(9) if values[cell(line, pos)] == EMPTY and d in cands[cell(line, pos)]}
        if 2 <= len(spots) <= n:
            lines.append((line, spots))
    if len(lines) < n:
        return None

    for combo in itertools.combinations(lines, n):
        sources = {line for line, _ in combo}
        targets = set().union(*(spots for _, spots in combo))
        if len(targets) != n:
            continue
        elims = []
        for pos in sorted(targets):
            for line in range(9):
                if line in sources:
                    continue
                idx = cell(line, pos)
                if d in cands[idx]:
                    elims.append((idx, d))
        if elims:
            kind = "rows" if by_rows else "cols"
            return Step(name, eliminations=elims, note=f"digit {d} on {kind} {sorted(s + 1 for s in sources)}")
    return None


def find_fish_of_size(values: Values, cands: Cands, n: int, name: str) -> Optional[Step]:
    for d in DIGITS:
        for by_rows in (True, False):
            step = find_fish(values, cands, d, n, name, by_rows)
            if step is not None:
                return step
    return None


def find_x_wing(values: Values, cands: Cands) -> Optional[Step]:
    return find_fish_of_size(values, cands, 2, "X-Wing")


def find_swordfish(values: Values, cands: Cands) -> Optional[Step]:
    return find_fish_of_size(values, cands, 3, "Swordfish")


def find_jellyfish(values: Values, cands: Cands) -> Optional[Step]:
    return find_fish_of_size(values, cands, 4, "Jellyfish")


def find_unique_rectangle(values: Values, cands: Cands) -> Optional[Step]:
    # Type 1 only: three corners are exactly {v1, v2}, the fourth loses both.
    for r1, r2 in itertools.combinations(range(9), 2):
        for c1, c2 in itertools.combinations(range(9), 2):
            corners = [rc_to_idx(r1, c1), rc_to_idx(r1, c2), rc_to_idx(r2, c1), rc_to_idx(r2, c2)]
            if len({box_of(idx) for idx in corners}) != 2:
                continue
            if any(values[idx] != EMPTY for idx in corners):
                continue
            every = set().union(*(cands[idx] for idx in corners))
            for v1, v2 in itertools.combinations(sorted(every), 2):
                pair = {v1, v2}
                exact = [idx for idx in corners if cands[idx] == pair]
                if len(exact) != 3:
                    continue
                fourth = next(idx for idx in corners if idx not in exact)
                if pair <= cands[fourth]:
                    return Step(
                        "Unique Rectangle Type 1",
                        eliminations=[(fourth, v1), (fourth, v2)],
                        note=f"{{{v1},{v2}}} at {cell_name(fourth)}",
                    )
    return None
