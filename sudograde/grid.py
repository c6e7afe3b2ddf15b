from typing import List, Optional, Set, Tuple

DIGITS = range(1, 10)
DIGIT_CHARS = "123456789"
EMPTY = 0

Idx = int
Pos = Tuple[int, int]
Grid = List[List[int]]


class ContradictionError(Exception):
    pass


def rc_to_idx(r: int, c: int) -> Idx:
    return r * 9 + c


def idx_to_rc(i: Idx) -> Pos:
    return divmod(i, 9)


def box_of(i: Idx) -> int:
    r, c = idx_to_rc(i)
    return (r // 3) * 3 + (c // 3)


ROW_UNITS: List[List[Idx]] = [[rc_to_idx(r, c) for c in range(9)] for r in range(9)]
COL_UNITS: List[List[Idx]] = [[rc_to_idx(r, c) for r in range(9)] for c in range(9)]
BOX_UNITS: List[List[Idx]] = []
for br in range(0, 9, 3):
    for bc in range(0, 9, 3):
        BOX_UNITS.append([rc_to_idx(r, c) for r in range(br, br + 3) for c in range(bc, bc + 3)])
UNITS: List[List[Idx]] = ROW_UNITS + COL_UNITS + BOX_UNITS

PEERS: List[Set[Idx]] = [set() for _ in range(81)]
for i in range(81):
    r, c = idx_to_rc(i)
    for j in ROW_UNITS[r] + COL_UNITS[c] + BOX_UNITS[box_of(i)]:
        if j != i:
            PEERS[i].add(j)


def sees(a: Idx, b: Idx) -> bool:
    return b in PEERS[a]


def cell_name(i: Idx) -> str:
    r, c = idx_to_rc(i)
    return f"r{r+1}c{c+1}"


def parse_puzzle(puzzle: str) -> Grid:
    s = puzzle.strip()
    if len(s) != 81:
        raise ValueError(f"puzzle must be exactly 81 chars, got {len(s)}")
    cells = [int(ch) if ch in DIGIT_CHARS else EMPTY for ch in s]
    return unflatten(cells)


def grid_to_string(grid: Grid) -> str:
    return "".join(str(v) for row in grid for v in row)


def clone_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def flatten(grid: Grid) -> List[int]:
    if len(grid) != 9 or any(len(row) != 9 for row in grid):
        raise ValueError("grid must be 9x9")
    return [v or EMPTY for row in grid for v in row]


def unflatten(values: List[int]) -> Grid:
    return [list(values[r * 9:(r + 1) * 9]) for r in range(9)]


def is_valid(grid: Grid, row: int, col: int, value: int) -> bool:
    for x in range(9):
        if grid[row][x] == value or grid[x][col] == value:
            return False
    start_row = row - row % 3
    start_col = col - col % 3
    for r in range(start_row, start_row + 3):
        for c in range(start_col, start_col + 3):
            if grid[r][c] == value:
                return False
    return True


def fits(values: List[int], idx: Idx, value: int) -> bool:
    return all(values[p] != value for p in PEERS[idx])


def is_solution(grid: Grid) -> bool:
    values = flatten(grid)
    full = set(DIGITS)
    return all({values[idx] for idx in unit} == full for unit in UNITS)


def validate_values(values: List[int]) -> None:
    for unit in UNITS:
        seen: Set[int] = set()
        for idx in unit:
            v = values[idx]
            if v == EMPTY:
                continue
            if v in seen:
                raise ContradictionError(f"duplicate given {v} at {cell_name(idx)}")
            seen.add(v)


def init_candidates(values: List[int]) -> List[Set[int]]:
    validate_values(values)
    cands: List[Set[int]] = []
    for idx in range(81):
        if values[idx] != EMPTY:
            cands.append(set())
            continue
        used = {values[p] for p in PEERS[idx]}
        cands.append(set(DIGITS) - used)
    return cands


def count_candidates(cands: List[Set[int]]) -> int:
    return sum(len(c) for c in cands)


def first_empty(values: List[int]) -> Optional[Idx]:
    for idx in range(81):
        if values[idx] == EMPTY:
            return idx
    return None
