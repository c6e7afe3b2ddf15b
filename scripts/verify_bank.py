#!/usr/bin/env python3
import argparse
import os
import random

from sudograde.bank import read_bank_file
from sudograde.batch import grade_entries, summarize_bank


def main():
    parser = argparse.ArgumentParser(description="Compare internal grades against bank ratings on a sample")
    parser.add_argument("banks", nargs="+", help="bank files with '<id> <puzzle> <rating>' lines")
    parser.add_argument("--sample-size", type=int, default=100)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--workers", type=int, default=os.cpu_count() or 1)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    for path in args.banks:
        try:
            entries = list(read_bank_file(path))
        except FileNotFoundError as e:
            print(f"Could not read {path}: {e}")
            continue
        print(f"\nProcessing {path} ({len(entries)} puzzles)...")
        sample = rng.sample(entries, min(args.sample_size, len(entries)))
        summary = summarize_bank(grade_entries(sample, workers=args.workers))

        print(f"Results for {path}:")
        print(f"  Sample Size: {len(sample)}")
        print(f"  Solvable: {summary['solvable']}/{len(sample)}")
        print(f"  Avg Bank Rating: {summary['avgBankRating']:.2f}")
        print(f"  Avg Internal Rating: {summary['avgInternalRating']:.2f}")
        if summary["ratio"] is not None:
            print(f"  Ratio: {summary['ratio']:.2f}x")
        if summary["correlation"] is not None:
            print(f"  Correlation: {summary['correlation']:.2f}")
        print("  Top Techniques:")
        for tech, count in summary["topTechniques"]:
            print(f"    - {tech}: {count}")


if __name__ == "__main__":
    main()
