import argparse
import json
import sys
from typing import Dict, List, Optional

from .grid import cell_name, parse_puzzle
from .grader import grade_puzzle
from .techniques import Step


def step_to_json(step: Step) -> Dict[str, object]:
    return {
        "technique": step.technique,
        "fills": [{"cell": cell_name(idx), "digit": d} for idx, d in step.fills],
        "eliminations": [{"cell": cell_name(idx), "digit": d} for idx, d in step.eliminations],
        "chainLength": step.chain_length,
        "note": step.note,
    }


def grade_to_json(puzzle: str, keep_trace: bool = False) -> Dict[str, object]:
    steps: List[Step] = []
    observer = (lambda step, values, cands: steps.append(step)) if keep_trace else None
    graded = grade_puzzle(parse_puzzle(puzzle), observer=observer)
    out: Dict[str, object] = {"puzzle": puzzle.strip()}
    out.update(graded.to_json())
    if keep_trace:
        out["trace"] = [step_to_json(s) for s in steps]
    return out


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Human-style Sudoku difficulty grader")
    parser.add_argument("puzzles", nargs="*", help="81-char puzzle strings, 0 for empty cells")
    parser.add_argument("--stdin", action="store_true", help="read one puzzle per line from stdin")
    parser.add_argument("--trace", action="store_true", help="include the full step trace per puzzle")
    args = parser.parse_args(argv)

    puzzles = list(args.puzzles)
    if args.stdin:
        puzzles.extend(line.strip() for line in sys.stdin if line.strip())
    if not puzzles:
        parser.error("no puzzles given")

    status = 0
    for puzzle in puzzles:
        try:
            out = grade_to_json(puzzle, keep_trace=args.trace)
        except ValueError as e:
            print(f"{puzzle}: {e}", file=sys.stderr)
            status = 1
            continue
        print(json.dumps(out, ensure_ascii=False))
    return status


if __name__ == "__main__":
    sys.exit(main())
