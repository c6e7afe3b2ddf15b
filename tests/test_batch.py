import json

from sudograde.bank import BankEntry
from sudograde.batch import (
    grade_entries,
    grade_entry,
    partition_results,
    summarize_bank,
    technique_samples,
    write_partitions,
)

CLASH = "11" + "0" * 79


def make_entries(sample_puzzle):
    return [
        BankEntry(puzzle=sample_puzzle, bank_id="b", rating=2.0),
        BankEntry(puzzle=CLASH, bank_id="a", rating=4.0),
        BankEntry(puzzle="123", bank_id="c"),
    ]


def test_grade_entry_reports_malformed():
    response = grade_entry(BankEntry(puzzle="123", bank_id="x"))
    assert response["success"] is False
    assert "81" in response["error"]
    assert response["key"] == "x"


def test_grade_entries_sorted(sample_puzzle):
    responses = grade_entries(make_entries(sample_puzzle))
    assert [r["key"] for r in responses] == ["a", "b", "c"]
    assert responses[0]["graded"]["isSolvable"] is False
    assert responses[1]["graded"]["isSolvable"] is True


def test_partition_and_write(tmp_path, sample_puzzle):
    parts = partition_results(grade_entries(make_entries(sample_puzzle)))
    counts = parts.counts()
    assert counts["unsolvable"] == 1
    assert counts["failed"] == 1
    assert sum(counts[label] for label in parts.labels) == 1

    written = write_partitions(parts, tmp_path / "out")
    assert len(written) == 7
    assert json.loads((tmp_path / "out" / "unsolvables.json").read_text(encoding="utf-8")) == {"a": CLASH}

    graded = {}
    for path in written[:-1]:
        graded.update(json.loads(path.read_text(encoding="utf-8")))
    assert graded["b"]["puzzle"] == sample_puzzle
    assert len(graded["b"]["solution"]) == 81


def test_summarize_bank(sample_puzzle):
    summary = summarize_bank(grade_entries(make_entries(sample_puzzle)))
    assert summary["total"] == 3
    assert summary["graded"] == 2
    assert summary["solvable"] == 1
    assert summary["avgBankRating"] == 3.0
    assert summary["avgInternalRating"] > 0
    assert summary["ratio"] is not None
    assert summary["topTechniques"][0][1] == 1


def test_summarize_empty():
    summary = summarize_bank([])
    assert summary["total"] == 0
    assert summary["ratio"] is None
    assert summary["correlation"] is None


def test_technique_samples(sample_puzzle):
    samples = technique_samples(grade_entries(make_entries(sample_puzzle)), per_technique=1)
    assert samples
    assert all(bucket == [sample_puzzle] for bucket in samples.values())
