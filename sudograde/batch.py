import json
import multiprocessing
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from .bank import LABELS, BankEntry, PathLike, difficulty_label
from .grader import grade_string

Response = Dict[str, object]


@dataclass
class Partitions:
    labels: Dict[str, Dict[str, Dict[str, object]]] = field(default_factory=lambda: {label: {} for label in LABELS})
    unsolvables: Dict[str, str] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)

    def counts(self) -> Dict[str, int]:
        out = {label: len(self.labels[label]) for label in LABELS}
        out["unsolvable"] = len(self.unsolvables)
        out["failed"] = len(self.failures)
        return out


def grade_entry(entry: BankEntry) -> Response:
    response: Response = {
        "key": entry.key,
        "puzzle": entry.puzzle,
        "bankId": entry.bank_id,
        "rating": entry.rating,
        "sourceFile": entry.source_file,
    }
    try:
        graded = grade_string(entry.puzzle)
    except Exception as e:
        response["success"] = False
        response["error"] = str(e)
        return response
    response["success"] = True
    response["graded"] = graded.to_json()
    return response


def grade_entries(entries: Sequence[BankEntry], workers: int = 1, progress: bool = False) -> List[Response]:
    if workers > 1:
        with multiprocessing.Pool(processes=workers) as pool:
            results: Iterable[Response] = pool.imap_unordered(grade_entry, entries, chunksize=16)
            if progress:
                results = tqdm(results, total=len(entries), desc="Grading puzzles", unit="puzzle")
            responses = list(results)
    else:
        iterator: Iterable[BankEntry] = entries
        if progress:
            iterator = tqdm(entries, desc="Grading puzzles", unit="puzzle")
        responses = [grade_entry(entry) for entry in iterator]
    responses.sort(key=lambda r: (str(r["key"]), str(r["sourceFile"])))
    return responses


def partition_results(responses: Iterable[Response]) -> Partitions:
    parts = Partitions()
    for response in responses:
        key = str(response["key"])
        if not response["success"]:
            parts.failures[key] = str(response.get("error", ""))
            continue
        graded = response["graded"]
        if not graded["isSolvable"]:
            parts.unsolvables[key] = str(response["puzzle"])
            continue
        label = difficulty_label(graded["difficulty"])
        parts.labels[label][key] = {
            "puzzle": response["puzzle"],
            "solution": graded["solution"],
            "difficulty": graded["difficulty"],
            "techniques": graded["techniquesUsed"],
        }
    return parts


def write_json(path: Path, data: object) -> None:
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")


def write_partitions(parts: Partitions, out_dir: PathLike) -> List[Path]:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    written = []
    for label in LABELS:
        path = out / f"{label}.json"
        write_json(path, parts.labels[label])
        written.append(path)
    path = out / "unsolvables.json"
    write_json(path, parts.unsolvables)
    written.append(path)
    return written


def summarize_bank(responses: Sequence[Response], top: int = 5) -> Dict[str, object]:
    graded = [r for r in responses if r["success"]]
    difficulties = np.array([r["graded"]["difficulty"] for r in graded], dtype=float)
    rated = [r for r in graded if r["rating"] is not None]
    bank = np.array([r["rating"] for r in rated], dtype=float)
    internal = np.array([r["graded"]["difficulty"] for r in rated], dtype=float)

    avg_bank = float(bank.mean()) if bank.size else 0.0
    avg_internal = float(difficulties.mean()) if difficulties.size else 0.0
    correlation: Optional[float] = None
    if bank.size >= 2 and bank.std() > 0 and internal.std() > 0:
        correlation = float(np.corrcoef(bank, internal)[0, 1])

    counts: Counter = Counter()
    for r in graded:
        counts.update(r["graded"]["techniquesUsed"])

    return {
        "total": len(responses),
        "graded": len(graded),
        "solvable": sum(1 for r in graded if r["graded"]["isSolvable"]),
        "avgBankRating": avg_bank,
        "avgInternalRating": avg_internal,
        "ratio": avg_internal / avg_bank if avg_bank else None,
        "correlation": correlation,
        "topTechniques": sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))[:top],
    }


def technique_samples(responses: Iterable[Response], per_technique: int = 3) -> Dict[str, List[str]]:
    samples: Dict[str, List[str]] = {}
    for r in responses:
        if not r["success"] or not r["graded"]["isSolvable"]:
            continue
        for tech in r["graded"]["techniquesUsed"]:
            bucket = samples.setdefault(tech, [])
            if len(bucket) < per_technique:
                bucket.append(str(r["puzzle"]))
    return samples
