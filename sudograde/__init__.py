from .grader import GradedResult, grade_puzzle, grade_string, propagate, trace_puzzle
from .grid import ContradictionError, Grid, grid_to_string, is_valid, parse_puzzle
from .scoring import TECHNIQUE_SCORES, normalize

__all__ = [
    "ContradictionError",
    "GradedResult",
    "Grid",
    "TECHNIQUE_SCORES",
    "grade_puzzle",
    "grade_string",
    "grid_to_string",
    "is_valid",
    "normalize",
    "parse_puzzle",
    "propagate",
    "trace_puzzle",
]
