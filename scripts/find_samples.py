#!/usr/bin/env python3
import argparse
import json
import os
from pathlib import Path

from sudograde.bank import BankEntry
from sudograde.batch import grade_entries, technique_samples


def main():
    parser = argparse.ArgumentParser(description="Find example puzzles for each technique")
    parser.add_argument("graded", help="a <label>.json file written by pregrade.py")
    parser.add_argument("--limit", type=int, default=5000)
    parser.add_argument("--per-technique", type=int, default=3)
    parser.add_argument("--workers", type=int, default=os.cpu_count() or 1)
    args = parser.parse_args()

    data = json.loads(Path(args.graded).read_text(encoding="utf-8"))
    entries = [BankEntry(puzzle=rec["puzzle"], bank_id=key) for key, rec in list(data.items())[: args.limit]]
    print(f"Searching for technique samples in {args.graded} ({len(entries)} puzzles)...")

    samples = technique_samples(grade_entries(entries, workers=args.workers), args.per_technique)
    for tech in sorted(samples):
        print(f"\nTechnique: {tech}")
        for puzzle in samples[tech]:
            print(f"  {puzzle}")


if __name__ == "__main__":
    main()
