"""
Tests for vanitygrind.cli
=========================

Covers CLI argument parsing, passthrough collection, and output formatting.
"""

import argparse

import pytest

from vanitygrind.cli.output import (
    print_banner,
    print_collection_report,
    print_command,
    print_cost_advisory,
    print_error,
    print_menu,
    print_run_failure,
)
from vanitygrind.cli.parser import (
    create_argument_parser,
    normalize_args,
    parse_args,
    split_passthrough,
)
from vanitygrind.core.models import CollectionReport, CommandPlan, Routing
from vanitygrind.cost_estimator import estimate_search_cost


# ── Argument Parser ────────────────────────────────────────────────────────


class TestCreateArgumentParser:
    def test_creates_parser(self):
        parser = create_argument_parser()
        assert isinstance(parser, argparse.ArgumentParser)

    def test_no_arguments_required(self):
        args = parse_args([])
        assert args.type is None
        assert args.prefix is None
        assert args.count is None
        assert args.passthrough == []

    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["-h"])
        assert exc_info.value.code == 0
        assert "--dry-run" in capsys.readouterr().out

    def test_all_flags(self):
        args = parse_args(
            [
                "--type", "both",
                "--prefix", "A",
                "--suffix", "Z",
                "--count", "2",
                "--case", "sensitive",
                "--yes",
                "--dry-run",
                "--out-dir", "./vanity-outputs",
                "-vv",
            ]
        )
        assert args.type == "both"
        assert args.prefix == "A"
        assert args.suffix == "Z"
        assert args.count == "2"
        assert args.case == "sensitive"
        assert args.yes is True
        assert args.dry_run is True
        assert args.out_dir == "./vanity-outputs"
        assert args.verbose == 2

    def test_count_kept_as_text(self):
        """Non-numeric counts are reported by the resolver, not argparse."""
        assert parse_args(["--count", "many"]).count == "many"


class TestPassthrough:
    def test_unknown_flags_collected_in_order(self):
        args = parse_args(["--num-threads", "4", "--type", "prefix", "--use-mnemonic", "--prefix", "Sun"])
        assert args.passthrough == ["--num-threads", "4", "--use-mnemonic"]
        assert args.prefix == "Sun"

    def test_everything_after_separator_is_passthrough(self):
        args = parse_args(["--prefix", "Sun", "--", "--yes", "--prefix", "x"])
        assert args.yes is False
        assert args.prefix == "Sun"
        assert args.passthrough == ["--yes", "--prefix", "x"]

    def test_unknown_before_separator_first(self):
        args = parse_args(["--word-count", "24", "--", "--no-outfile"])
        assert args.passthrough == ["--word-count", "24", "--no-outfile"]

    def test_no_abbreviations(self):
        """A partial flag name is forwarded, not expanded to one of ours."""
        args = parse_args(["--pre", "Sun"])
        assert args.prefix is None
        assert args.passthrough == ["--pre", "Sun"]

    def test_split_passthrough(self):
        assert split_passthrough(["a", "--", "b", "--", "c"]) == (["a"], ["b", "--", "c"])
        assert split_passthrough(["a"]) == (["a"], [])


class TestNormalizeArgs:
    def test_lowercases_modes(self):
        args = argparse.Namespace(type=" PREFIX ", case="Insensitive")
        result = normalize_args(args)
        assert result.type == "prefix"
        assert result.case == "insensitive"

    def test_none_left_alone(self):
        args = normalize_args(argparse.Namespace(type=None, case=None))
        assert args.type is None
        assert args.case is None


# ── Output formatting ──────────────────────────────────────────────────────


class TestOutput:
    def test_banner_with_version(self, capsys):
        print_banner("solana-keygen 1.18.26")
        out = capsys.readouterr().out
        assert "Vanity address generator" in out
        assert "Found generator: solana-keygen 1.18.26" in out

    def test_menu_lists_options(self, capsys):
        print_menu()
        out = capsys.readouterr().out
        for line in ("1) Prefix only", "4) Show advanced example", "5) Exit"):
            assert line in out

    def test_cost_advisory(self, capsys, make_request):
        req = make_request(prefix="Sun")
        print_cost_advisory(estimate_search_cost(req), req)
        out = capsys.readouterr().out
        assert "Search Cost Estimate" in out
        assert "195,112" in out
        assert "case-insensitive" in out
        assert "WARNING" not in out

    def test_cost_advisory_long_pattern_warns(self, capsys, make_request):
        req = make_request(prefix="abcdef", case_mode="sensitive")
        print_cost_advisory(estimate_search_cost(req), req)
        out = capsys.readouterr().out
        assert "WARNING" in out
        assert "6 characters" in out
        assert "Case-sensitive" in out

    def test_command_shown_literally(self, capsys):
        plan = CommandPlan(argv=("solana-keygen", "grind", "--label", "[bold]x"))
        print_command(plan)
        out = capsys.readouterr().out
        assert "The following command will be run:" in out
        assert "[bold]x" in out

    def test_dry_run_heading(self, capsys):
        print_command(CommandPlan(argv=("a",)), dry_run=True)
        assert "Dry run" in capsys.readouterr().out

    def test_explicit_output_note(self, capsys):
        print_command(CommandPlan(argv=("a", "--no-outfile"), explicit_output_control=True))
        assert "will not be moved" in capsys.readouterr().out

    def test_collection_report_moved(self, capsys, tmp_path):
        key = tmp_path / "SunXyz.json"
        key.write_text("[1, 2]")
        report = CollectionReport(routing=Routing.MOVED, destination=tmp_path, moved=[key], inventory=[key])
        print_collection_report(report)
        out = capsys.readouterr().out
        assert "Generation completed" in out
        assert "Moved 1 file(s)" in out
        assert "SunXyz.json" in out

    def test_collection_report_failures_listed(self, capsys, tmp_path):
        report = CollectionReport(
            routing=Routing.MOVED,
            destination=tmp_path,
            failed={tmp_path / "a.json": "denied"},
        )
        print_collection_report(report)
        out = capsys.readouterr().out
        assert "Could not move a.json: denied" in out
        assert "(empty)" in out

    def test_run_failure(self, capsys):
        print_run_failure(4)
        assert "exit status 4" in capsys.readouterr().out

    def test_error_escaped(self, capsys):
        print_error("bad [red]value")
        assert "bad [red]value" in capsys.readouterr().out
