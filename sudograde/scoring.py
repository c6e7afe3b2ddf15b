import math
from typing import Dict, List, Set

from .grid import count_candidates

BACKTRACKING = "Backtracking"

# Candidate count of the template empty grid the weights were tuned on.
TEMPLATE_CANDIDATES = 727
DENSITY_SCALE = 20

# Base weight of one application. Chain techniques add their chain length.
TECHNIQUE_SCORES: Dict[str, int] = {
    "Naked Single": 1,
    "Hidden Single": 2,
    "Naked Pair": 5,
    "Naked Triple": 10,
    "Hidden Pair": 10,
    "Hidden Triple": 25,
    "Naked Quad": 40,
    "Hidden Quad": 60,
    "Pointing Pairs": 20,
    "Line/Box Reduction": 20,
    "Gurth's Theorem": 80,
    "BUG+1": 30,
    "X-Wing": 30,
    "Unique Rectangle Type 1": 20,
    "Chute Remote Pair": 25,
    "Simple Colouring": 50,
    "Y-Wing": 50,
    "Rectangle Elimination": 25,
    "Swordfish": 50,
    "XYZ-Wing": 60,
    "Tridagon": 60,
    "X-Cycle": 60,
    "XY-Chain": 50,
    "3D Medusa": 80,
    "Jellyfish": 80,
    "Unique Rectangle 2,3,4,5": 50,
    "Avoidable Rectangle": 60,
    "Twinned XY-Chain": 100,
    "Fireworks": 100,
    "SK Loop": 100,
    "Extended Unique Rectangle": 90,
    "Hidden Unique Rectangle": 100,
    "WXYZ-Wing": 100,
    "Aligned Pair Exclusion": 140,
    "Exocet": 300,
    "Grouped X-Cycle": 100,
    "Finned X-Wing": 160,
    "Finned Swordfish": 190,
    "Franken Swordfish": 150,
    "Alternating Inference Chain": 100,
    "Sue-de-Coq": 180,
    "Digit Forcing Chain": 120,
    "Nishio Forcing Chain": 120,
    "Cell Forcing Chain": 180,
    "Unit Forcing Chain": 180,
    "Almost Locked Set": 140,
    "Death Blossom": 200,
    "Pattern Overlay": 100,
    "Quad Forcing Chain": 200,
    "Bowman Bingo": 100,
}

CATALOGUE: List[str] = list(TECHNIQUE_SCORES) + [BACKTRACKING]


def density_factor(cands: List[Set[int]]) -> float:
    return count_candidates(cands) / TEMPLATE_CANDIDATES * DENSITY_SCALE


def step_weight(score: int, factor: float, chain_length: int = 0) -> float:
    return (score + chain_length) * factor


def normalize(raw: float) -> float:
    # 2 * log5(raw)
    if raw <= 0:
        return 0.0
    return max(0.0, math.log(raw) / math.log(5) * 2)
