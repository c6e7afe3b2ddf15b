#!/usr/bin/env python3
import argparse
import json
from pathlib import Path

from sudograde.bank import load_puzzle_dirs


def main():
    parser = argparse.ArgumentParser(description="Collect puzzles/<category>/*.txt into one JSON file")
    parser.add_argument("--puzzles-dir", default="puzzles")
    parser.add_argument("--out", default="data/puzzles.json")
    args = parser.parse_args()

    data = load_puzzle_dirs(args.puzzles_dir)
    for category, puzzles in data.items():
        print(f"Loaded {len(puzzles)} puzzles for {category}")

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Puzzles saved to {out}")


if __name__ == "__main__":
    main()
