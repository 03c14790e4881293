"""Tests for cribbage/cli.py — subcommand dispatch and exit codes."""

from __future__ import annotations

import pytest

from cribbage.cli import build_parser, main


class TestScore:
    def test_prints_total(self, capsys):
        assert main(["score", "2H", "3H", "5H", "TH", "5C"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Hand: 2H 3H 5H TH | 5C"
        assert out[-1] == "14"

    def test_perfect_hand(self, capsys):
        assert main(["score", "5H", "5C", "5S", "JD", "5D"]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == "29"

    def test_ten_alias(self, capsys):
        assert main(["score", "2H", "3H", "5H", "0H", "5C"]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == "14"

    def test_bad_code(self, capsys):
        assert main(["score", "2H", "3H", "5H", "XH", "5C"]) == 2
        assert "error" in capsys.readouterr().err

    def test_duplicate_card(self, capsys):
        assert main(["score", "2H", "2H", "5H", "TH", "5C"]) == 2
        assert "error" in capsys.readouterr().err

    def test_wrong_card_count_exits(self):
        with pytest.raises(SystemExit):
            main(["score", "2H", "3H", "5H", "TH"])


class TestEnumerate:
    def test_writes_capped_csv(self, tmp_path, capsys):
        out = tmp_path / "scores.csv"
        assert main(["enumerate", "--out", str(out), "--max-records", "10", "--no-progress"]) == 0
        lines = out.read_text().splitlines()
        assert len(lines) == 11
        assert lines[0] == "hand0,hand1,hand2,hand3,cut,score"
        assert "Wrote 10 rows" in capsys.readouterr().out


class TestSimulate:
    def test_runs(self, capsys):
        assert main(["simulate", "--hands", "50", "--seed", "1"]) == 0
        assert "Hands: 50" in capsys.readouterr().out


class TestDiscard:
    def test_reports_both_strategies(self, capsys):
        assert main(["discard", "--deals", "20", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "random" in out
        assert "max_score" in out


class TestParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_distribution_defaults(self):
        args = build_parser().parse_args(["distribution"])
        assert args.workers == 1
        assert args.out is None
        assert not args.log


class TestInvalidOptions:
    @pytest.mark.parametrize(
        "argv",
        [
            ["simulate", "--hands", "0"],
            ["simulate", "--hands", "-3"],
            ["discard", "--deals", "0"],
            ["distribution", "--workers", "0", "--no-progress"],
        ],
    )
    def test_reported_with_usage_exit(self, argv, capsys):
        assert main(argv) == 2
        captured = capsys.readouterr()
        assert captured.err.startswith("error: ")

    def test_negative_max_records(self, tmp_path, capsys):
        out = tmp_path / "scores.csv"
        argv = ["enumerate", "--out", str(out), "--max-records", "-1", "--no-progress"]
        assert main(argv) == 2
        assert "max_records" in capsys.readouterr().err
        assert not out.exists()
