from typing import List, Optional, Set

from .grid import EMPTY, Grid, clone_grid, first_empty, fits, idx_to_rc, is_valid


def backtrack(values: List[int], cands: List[Set[int]]) -> bool:
    idx = first_empty(values)
    if idx is None:
        return True
    for v in sorted(cands[idx]):
        if fits(values, idx, v):
            values[idx] = v
            if backtrack(values, cands):
                return True
            values[idx] = EMPTY
    return False


def solve_grid(grid: Grid) -> Optional[Grid]:
    board = clone_grid(grid)

    def solve() -> bool:
        for i in range(81):
            r, c = idx_to_rc(i)
            if board[r][c] != EMPTY:
                continue
            for v in range(1, 10):
                if is_valid(board, r, c, v):
                    board[r][c] = v
                    if solve():
                        return True
                    board[r][c] = EMPTY
            return False
        return True

    if solve():
        return board
    return None
