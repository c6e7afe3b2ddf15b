#!/usr/bin/env python3
import argparse
import json
import os
from pathlib import Path

from sudograde.bank import entries_from_categories, read_bank_file
from sudograde.batch import grade_entries, partition_results, write_partitions


def main():
    parser = argparse.ArgumentParser(description="Grade puzzles and partition them by difficulty label")
    parser.add_argument("inputs", nargs="+", help="puzzles.json from prepare_puzzles.py, or bank .txt files")
    parser.add_argument("--out-dir", default="data/graded")
    parser.add_argument("--workers", type=int, default=os.cpu_count() or 1)
    args = parser.parse_args()

    entries = []
    for path in args.inputs:
        if path.endswith(".json"):
            data = json.loads(Path(path).read_text(encoding="utf-8"))
            entries.extend(entries_from_categories(data))
        else:
            entries.extend(read_bank_file(path))

    print(f"Grading {len(entries)} puzzles with {args.workers} workers...")
    responses = grade_entries(entries, workers=args.workers, progress=True)
    parts = partition_results(responses)

    for key, error in sorted(parts.failures.items()):
        print(f"FAILED {key}: {error}")

    written = write_partitions(parts, args.out_dir)
    print(f"Wrote {len(written)} files to {args.out_dir}")
    for label, count in parts.counts().items():
        print(f"{label}: {count} puzzles")


if __name__ == "__main__":
    main()
