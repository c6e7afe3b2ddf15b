from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from .grid import BOX_UNITS, COL_UNITS, DIGITS, EMPTY, PEERS, ROW_UNITS, UNITS, Idx, box_of, cell_name, idx_to_rc, sees
from .techniques import Cands, Step, Values


def cells_with_size(values: Values, cands: Cands, size: int) -> List[Idx]:
    return [idx for idx in range(81) if values[idx] == EMPTY and len(cands[idx]) == size]


def find_y_wing(values: Values, cands: Cands) -> Optional[Step]:
    bivalues = cells_with_size(values, cands, 2)
    for i, pivot in enumerate(bivalues):
        pivot_vals = sorted(cands[pivot])
        for j, wing1 in enumerate(bivalues):
            if i == j or not sees(pivot, wing1):
                continue
            common = next((v for v in pivot_vals if v in cands[wing1]), None)
            if common is None:
                continue
            z = next(v for v in sorted(cands[wing1]) if v != common)
            y = next(v for v in pivot_vals if v != common)
            if z == y:
                continue

            for k in range(j + 1, len(bivalues)):
                wing2 = bivalues[k]
                if k == i or not sees(pivot, wing2):
                    continue
                if y not in cands[wing2] or z not in cands[wing2]:
                    continue
                targets = sorted(PEERS[wing1] & PEERS[wing2])
                elims = [(idx, z) for idx in targets if z in cands[idx]]
                if elims:
                    return Step(
                        "Y-Wing",
                        eliminations=elims,
                        note=f"pivot {cell_name(pivot)} wings {cell_name(wing1)} {cell_name(wing2)}",
                    )
    return None


def find_xyz_wing(values: Values, cands: Cands) -> Optional[Step]:
    trivalues = cells_with_size(values, cands, 3)
    bivalues = cells_with_size(values, cands, 2)
    for pivot in trivalues:
        wings = [idx for idx in bivalues if sees(pivot, idx) and cands[idx] <= cands[pivot]]
        for a, wing1 in enumerate(wings):
            for wing2 in wings[a + 1:]:
                shared = cands[pivot] & cands[wing1] & cands[wing2]
                if len(shared) != 1:
                    continue
                z = next(iter(shared))
                targets = sorted(PEERS[pivot] & PEERS[wing1] & PEERS[wing2])
                elims = [(idx, z) for idx in targets if z in cands[idx]]
                if elims:
                    return Step(
                        "XYZ-Wing",
                        eliminations=elims,
                        note=f"pivot {cell_name(pivot)} wings {cell_name(wing1)} {cell_name(wing2)}",
                    )
    return None


def find_xy_chain(values: Values, cands: Cands) -> Optional[Step]:
    bivalues = cells_with_size(values, cands, 2)
    links: Dict[Idx, List[Idx]] = {a: [b for b in bivalues if sees(a, b)] for a in bivalues}

    for start in bivalues:
        for start_val in sorted(cands[start]):
            end_val = next(v for v in cands[start] if v != start_val)
            visited: Set[Idx] = {start}

            def extend(current: Idx, seek: int) -> Optional[Step]:
                for nxt in links[current]:
                    if nxt in visited or seek not in cands[nxt]:
                        continue
                    other = next(v for v in cands[nxt] if v != seek)
                    if other == start_val:
                        targets = sorted(PEERS[start] & PEERS[nxt])
                        elims = [(idx, start_val) for idx in targets if start_val in cands[idx]]
                        if elims:
                            return Step(
                                "XY-Chain",
                                eliminations=elims,
                                chain_length=len(visited),
                                note=f"{cell_name(start)} .. {cell_name(nxt)} on {start_val}",
                            )
                    visited.add(nxt)
                    found = extend(nxt, other)
                    if found is not None:
                        return found
                    visited.discard(nxt)
                return None

            step = extend(start, end_val)
            if step is not None:
                return step
    return None


def conjugate_graph(values: Values, cands: Cands, d: int) -> Tuple[List[Idx], Dict[Idx, List[Idx]]]:
    nodes = [idx for idx in range(81) if values[idx] == EMPTY and d in cands[idx]]
    node_set = set(nodes)
    adjacency: Dict[Idx, List[Idx]] = {idx: [] for idx in nodes}
    for i in range(9):
        for unit in (ROW_UNITS[i], COL_UNITS[i], BOX_UNITS[i]):
            holders = [idx for idx in unit if idx in node_set]
            if len(holders) == 2:
                a, b = holders
                adjacency[a].append(b)
                adjacency[b].append(a)
    return nodes, adjacency


def two_colour(start: Idx, adjacency: Dict[Idx, List[Idx]]) -> Tuple[Dict[Idx, int], bool]:
    colours = {start: 0}
    queue = deque([start])
    bipartite = True
    while queue:
        u = queue.popleft()
        for v in adjacency[u]:
            if v not in colours:
                colours[v] = 1 - colours[u]
                queue.append(v)
            elif colours[v] == colours[u]:
                bipartite = False
    return colours, bipartite


def find_simple_colouring(values: Values, cands: Cands) -> Optional[Step]:
    for d in DIGITS:
        nodes, adjacency = conjugate_graph(values, cands, d)
        seen: Set[Idx] = set()
        for start in nodes:
            if start in seen:
                continue
            colours, bipartite = two_colour(start, adjacency)
            seen.update(colours)
            if not bipartite:
                continue

            # colour twice in a unit: that colour is false everywhere
            for colour in (0, 1):
                members = [idx for idx, c in colours.items() if c == colour]
                for unit in UNITS:
                    if sum(1 for idx in members if idx in unit) > 1:
                        elims = [(idx, d) for idx in sorted(members)]
                        return Step("Simple Colouring", eliminations=elims, note=f"digit {d} colour clash")

            # an outside holder that sees both colours cannot be d
            for idx in nodes:
                if idx in colours:
                    continue
                seen_colours = {colours[other] for other in colours if sees(idx, other)}
                if seen_colours == {0, 1}:
                    return Step("Simple Colouring", eliminations=[(idx, d)], note=f"{cell_name(idx)} sees both colours of {d}")
    return None


def find_bug_plus_one(values: Values, cands: Cands) -> Optional[Step]:
    bug_cell: Optional[Idx] = None
    for idx in range(81):
        if values[idx] != EMPTY:
            continue
        size = len(cands[idx])
        if size == 2:
            continue
        if size == 3 and bug_cell is None:
            bug_cell = idx
            continue
        return None
    if bug_cell is None:
        return None

    r, c = idx_to_rc(bug_cell)
    houses = (ROW_UNITS[r], COL_UNITS[c], BOX_UNITS[box_of(bug_cell)])
    for v in sorted(cands[bug_cell]):
        if all(sum(1 for idx in house if v in cands[idx]) == 3 for house in houses):
            return Step("BUG+1", fills=[(bug_cell, v)], note=f"{cell_name(bug_cell)}={v}")
    return None
