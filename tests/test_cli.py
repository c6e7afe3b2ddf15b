import io
import json

from sudograde.cli import main


def test_grades_positional_puzzle(capsys, sample_puzzle):
    assert main([sample_puzzle]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["puzzle"] == sample_puzzle
    assert out["isSolvable"] is True
    assert "trace" not in out


def test_trace(capsys, sample_puzzle):
    assert main(["--trace", sample_puzzle]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["trace"]
    first = out["trace"][0]
    assert set(first) == {"technique", "fills", "eliminations", "chainLength", "note"}
    assert {s["technique"] for s in out["trace"]} == set(out["techniquesUsed"])


def test_stdin(capsys, monkeypatch, sample_puzzle):
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{sample_puzzle}\n\n{sample_puzzle}\n"))
    assert main(["--stdin"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2


def test_malformed_puzzle(capsys, sample_puzzle):
    assert main(["123", sample_puzzle]) == 1
    captured = capsys.readouterr()
    assert "123" in captured.err
    assert len(captured.out.splitlines()) == 1
