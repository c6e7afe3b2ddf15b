import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

PathLike = Union[str, Path]

LABELS = ["easy", "normal", "medium", "hard", "expert", "master"]

# Lower bound of each label, hardest first.
THRESHOLDS = [
    (9.0, "master"),
    (7.0, "expert"),
    (5.0, "hard"),
    (4.0, "medium"),
    (3.0, "normal"),
]


def puzzle_id(puzzle: str) -> str:
    return hashlib.sha256(puzzle.encode("utf-8")).hexdigest()[:12]


@dataclass(frozen=True)
class BankEntry:
    puzzle: str
    bank_id: Optional[str] = None
    rating: Optional[float] = None
    source_file: str = ""

    @property
    def key(self) -> str:
        return self.bank_id or puzzle_id(self.puzzle)


def difficulty_label(difficulty: float) -> str:
    for bound, label in THRESHOLDS:
        if difficulty >= bound:
            return label
    return "easy"


# Accepted lines: "<puzzle>" or "<id> <puzzle> <rating>"; anything else is skipped.
def parse_bank_line(line: str, source_file: str = "") -> Optional[BankEntry]:
    parts = line.split()
    if len(parts) == 1 and len(parts[0]) == 81:
        return BankEntry(puzzle=parts[0], source_file=source_file)
    if len(parts) >= 3 and len(parts[1]) == 81:
        try:
            rating = float(parts[2])
        except ValueError:
            rating = None
        return BankEntry(puzzle=parts[1], bank_id=parts[0], rating=rating, source_file=source_file)
    return None


def read_bank_file(path: PathLike) -> Iterator[BankEntry]:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"bank file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            entry = parse_bank_line(line, source_file=path.name)
            if entry is not None:
                yield entry


def load_puzzle_dirs(root: PathLike) -> Dict[str, List[str]]:
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"puzzle directory not found: {root}")
    result: Dict[str, List[str]] = {}
    for category in sorted(p for p in root.iterdir() if p.is_dir()):
        puzzles: List[str] = []
        for bank in sorted(category.glob("*.txt")):
            puzzles.extend(entry.puzzle for entry in read_bank_file(bank))
        result[category.name] = puzzles
    return result


def entries_from_categories(data: Dict[str, List[str]], source_file: str = "") -> List[BankEntry]:
    return [BankEntry(puzzle=p, source_file=source_file or category) for category, puzzles in data.items() for p in puzzles]
