import pytest

from sudograde.grid import (
    EMPTY,
    PEERS,
    UNITS,
    ContradictionError,
    flatten,
    grid_to_string,
    init_candidates,
    is_solution,
    is_valid,
    parse_puzzle,
    rc_to_idx,
    sees,
)
from sudograde.search import backtrack, solve_grid


def test_parse_puzzle_builds_9x9(sample_puzzle):
    grid = parse_puzzle(sample_puzzle)
    assert len(grid) == 9
    assert all(len(row) == 9 for row in grid)
    assert grid[0][0] == 0
    assert grid[0][1] == 9
    assert grid_to_string(grid) == sample_puzzle


def test_parse_puzzle_treats_non_digits_as_empty():
    grid = parse_puzzle("." * 40 + "5" + "x" * 40)
    assert grid[4][4] == 5
    assert sum(v != 0 for row in grid for v in row) == 1


@pytest.mark.parametrize("bad", ["", "123", "0" * 80, "0" * 82])
def test_parse_puzzle_rejects_wrong_length(bad):
    with pytest.raises(ValueError):
        parse_puzzle(bad)


def test_is_valid(sample_puzzle):
    grid = parse_puzzle(sample_puzzle)
    # 9 already sits in row 0
    assert not is_valid(grid, 0, 0, 9)
    assert is_valid(grid, 0, 0, 2)
    # 5 sits in column 0 (r3c1)
    assert not is_valid(grid, 0, 0, 5)


def test_units_and_peers():
    assert len(UNITS) == 27
    assert all(len(p) == 20 for p in PEERS)
    assert sees(rc_to_idx(0, 0), rc_to_idx(2, 2))
    assert sees(rc_to_idx(0, 0), rc_to_idx(0, 8))
    assert not sees(rc_to_idx(0, 0), rc_to_idx(4, 4))
    assert not sees(rc_to_idx(3, 3), rc_to_idx(3, 3))


def test_init_candidates_respects_placed_values(sample_puzzle):
    values = flatten(parse_puzzle(sample_puzzle))
    cands = init_candidates(values)
    for idx in range(81):
        if values[idx]:
            assert cands[idx] == set()
        else:
            assert cands[idx]
            assert not cands[idx] & {values[p] for p in PEERS[idx]}


def test_init_candidates_rejects_clashing_givens():
    values = flatten(parse_puzzle("11" + "0" * 79))
    with pytest.raises(ContradictionError):
        init_candidates(values)


def test_solve_grid_finds_valid_solution(sample_puzzle):
    grid = parse_puzzle(sample_puzzle)
    solution = solve_grid(grid)
    assert solution is not None
    assert is_solution(solution)
    for r in range(9):
        for c in range(9):
            if grid[r][c]:
                assert solution[r][c] == grid[r][c]
    # input untouched
    assert grid_to_string(grid) == sample_puzzle


def test_is_solution(solved_grid):
    assert is_solution(solved_grid)
    solved_grid[0][0], solved_grid[0][1] = solved_grid[0][1], solved_grid[0][0]
    assert not is_solution(solved_grid)


def test_backtrack_completes_in_place(solved_grid):
    values = flatten(solved_grid)
    for idx in (0, 10, 20, 40, 80):
        values[idx] = EMPTY
    cands = init_candidates(values)
    assert backtrack(values, cands)
    assert values == flatten(solved_grid)


def test_backtrack_reports_dead_end():
    values = flatten(parse_puzzle("123456780" + "000000009" + "0" * 63))
    cands = init_candidates(values)
    assert cands[8] == set()
    assert not backtrack(values, cands)
    assert values[8] == EMPTY
