import pytest

from sudograde.bank import (
    BankEntry,
    difficulty_label,
    entries_from_categories,
    load_puzzle_dirs,
    parse_bank_line,
    puzzle_id,
    read_bank_file,
)


@pytest.mark.parametrize(
    "difficulty,label",
    [(0, "easy"), (2.99, "easy"), (3, "normal"), (4.5, "medium"), (5, "hard"), (7.2, "expert"), (9, "master"), (12, "master")],
)
def test_difficulty_label(difficulty, label):
    assert difficulty_label(difficulty) == label


def test_puzzle_id_is_stable(sample_puzzle):
    assert puzzle_id(sample_puzzle) == puzzle_id(sample_puzzle)
    assert len(puzzle_id(sample_puzzle)) == 12
    assert puzzle_id(sample_puzzle) != puzzle_id("0" * 81)


def test_parse_bank_line(sample_puzzle):
    bare = parse_bank_line(sample_puzzle + "\n")
    assert bare == BankEntry(puzzle=sample_puzzle)
    assert bare.key == puzzle_id(sample_puzzle)

    rated = parse_bank_line(f"abc123 {sample_puzzle} 4.5", source_file="bank.txt")
    assert rated.bank_id == "abc123"
    assert rated.rating == 4.5
    assert rated.source_file == "bank.txt"
    assert rated.key == "abc123"

    unrated = parse_bank_line(f"abc123 {sample_puzzle} n/a")
    assert unrated.rating is None

    assert parse_bank_line("") is None
    assert parse_bank_line("# comment line") is None
    assert parse_bank_line("123") is None


def test_read_bank_file(tmp_path, sample_puzzle):
    bank = tmp_path / "bank.txt"
    bank.write_text(f"{sample_puzzle}\njunk\nid1 {sample_puzzle} 3.1\n", encoding="utf-8")
    entries = list(read_bank_file(bank))
    assert len(entries) == 2
    assert all(e.source_file == "bank.txt" for e in entries)
    assert entries[1].rating == 3.1


def test_read_bank_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        list(read_bank_file(tmp_path / "nope.txt"))


def test_load_puzzle_dirs(tmp_path, sample_puzzle):
    (tmp_path / "easy").mkdir()
    (tmp_path / "hard").mkdir()
    (tmp_path / "easy" / "a.txt").write_text(sample_puzzle + "\n", encoding="utf-8")
    (tmp_path / "hard" / "b.txt").write_text(f"x {sample_puzzle} 6\n{sample_puzzle}\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    data = load_puzzle_dirs(tmp_path)
    assert data == {"easy": [sample_puzzle], "hard": [sample_puzzle, sample_puzzle]}

    entries = entries_from_categories(data)
    assert len(entries) == 3
    assert entries[0].source_file == "easy"


def test_load_puzzle_dirs_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_puzzle_dirs(tmp_path / "missing")
