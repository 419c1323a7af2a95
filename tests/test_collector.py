"""
Tests for vanitygrind.core.collector
====================================

Covers the artifact snapshot, output directory preparation, and the three
routing outcomes of a successful run.
"""

import shutil

import pytest

from vanitygrind.core.collector import OutputCollector, list_directory, snapshot_artifacts
from vanitygrind.core.errors import InputError
from vanitygrind.core.models import CommandPlan, Routing, RunResult

PLAN = CommandPlan(argv=("solana-keygen", "grind", "--starts-with", "A:1"))
EXPLICIT_PLAN = CommandPlan(argv=PLAN.argv + ("--no-outfile",), explicit_output_control=True)


@pytest.fixture()
def generated(workdir):
    """Two artifacts written by a run, alongside one that predates it."""
    (workdir / "old.json").write_text("[]")
    before = snapshot_artifacts(workdir)
    for name in ("AbcZ.json", "AxyZ.json"):
        (workdir / name).write_text("[1]")
    after = snapshot_artifacts(workdir)
    return RunResult(exit_code=0, generated_files=after - before)


# ── Snapshots ──────────────────────────────────────────────────────────────


class TestSnapshot:
    def test_only_matching_suffix(self, tmp_path):
        (tmp_path / "a.json").write_text("[]")
        (tmp_path / "b.txt").write_text("")
        (tmp_path / "dir.json").mkdir()
        assert {p.name for p in snapshot_artifacts(tmp_path)} == {"a.json"}

    def test_missing_directory(self, tmp_path):
        assert snapshot_artifacts(tmp_path / "nope") == frozenset()

    def test_list_directory_sorted(self, tmp_path):
        for name in ("b", "a", "c"):
            (tmp_path / name).write_text("")
        assert [p.name for p in list_directory(tmp_path)] == ["a", "b", "c"]


# ── prepare ────────────────────────────────────────────────────────────────


class TestPrepare:
    def test_creates_nested_directory(self, workdir):
        out = workdir / "vanity-outputs" / "today"
        OutputCollector(workdir).prepare(out)
        assert out.is_dir()

    def test_none_is_noop(self, workdir):
        OutputCollector(workdir).prepare(None)
        assert list(workdir.iterdir()) == []

    def test_unusable_path(self, workdir):
        blocker = workdir / "file"
        blocker.write_text("")
        with pytest.raises(InputError, match="Cannot create output directory"):
            OutputCollector(workdir).prepare(blocker / "sub")


# ── collect ────────────────────────────────────────────────────────────────


class TestCollect:
    def test_moves_only_new_artifacts(self, workdir, generated):
        out = workdir / "vanity-outputs"
        report = OutputCollector(workdir).collect(generated, PLAN, out)

        assert report.routing == Routing.MOVED
        assert report.destination == out
        assert sorted(p.name for p in report.moved) == ["AbcZ.json", "AxyZ.json"]
        assert report.failed == {}
        assert (workdir / "old.json").exists()
        assert not (workdir / "AbcZ.json").exists()
        assert [p.name for p in report.inventory] == ["AbcZ.json", "AxyZ.json"]

    def test_creates_out_dir_if_missing(self, workdir, generated):
        out = workdir / "a" / "b"
        OutputCollector(workdir).collect(generated, PLAN, out)
        assert (out / "AxyZ.json").exists()

    def test_explicit_output_control_moves_nothing(self, workdir, generated):
        out = workdir / "vanity-outputs"
        report = OutputCollector(workdir).collect(generated, EXPLICIT_PLAN, out)

        assert report.routing == Routing.EXPLICIT
        assert report.moved == []
        assert (workdir / "AbcZ.json").exists()

    def test_no_out_dir_leaves_files_in_place(self, workdir, generated):
        report = OutputCollector(workdir).collect(generated, PLAN, None)

        assert report.routing == Routing.WORKING_DIR
        assert report.destination == workdir
        assert [p.name for p in report.inventory] == ["AbcZ.json", "AxyZ.json"]
        assert (workdir / "AbcZ.json").exists()

    @pytest.mark.parametrize("same_dir", [".", "./", "sub/.."])
    def test_out_dir_is_working_dir(self, workdir, generated, same_dir):
        (workdir / "sub").mkdir()
        report = OutputCollector(workdir).collect(generated, PLAN, workdir / same_dir)

        assert report.routing == Routing.WORKING_DIR
        assert report.failed == {}
        assert [p.name for p in report.inventory] == ["AbcZ.json", "AxyZ.json"]
        assert (workdir / "AbcZ.json").exists()

    def test_out_dir_unusable_after_run(self, workdir, generated):
        blocker = workdir / "blocker"
        blocker.write_text("")
        with pytest.raises(InputError, match="Cannot create output directory"):
            OutputCollector(workdir).collect(generated, PLAN, blocker / "keys")
        assert (workdir / "AbcZ.json").exists()

    def test_existing_target_not_overwritten(self, workdir, generated):
        out = workdir / "vanity-outputs"
        out.mkdir()
        (out / "AbcZ.json").write_text("keep")

        report = OutputCollector(workdir).collect(generated, PLAN, out)

        assert (out / "AbcZ.json").read_text() == "keep"
        assert [p.name for p in report.failed] == ["AbcZ.json"]
        assert [p.name for p in report.moved] == ["AxyZ.json"]

    def test_move_failure_is_best_effort(self, workdir, generated, monkeypatch):
        real_move = shutil.move

        def flaky_move(src, dst):
            if src.endswith("AbcZ.json"):
                raise PermissionError("denied")
            return real_move(src, dst)

        monkeypatch.setattr("vanitygrind.core.collector.shutil.move", flaky_move)
        out = workdir / "vanity-outputs"
        report = OutputCollector(workdir).collect(generated, PLAN, out)

        assert [p.name for p in report.moved] == ["AxyZ.json"]
        assert "denied" in next(iter(report.failed.values()))
        assert (workdir / "AbcZ.json").exists()

    def test_files_outside_working_dir_ignored(self, workdir, tmp_path):
        elsewhere = tmp_path / "elsewhere.json"
        elsewhere.write_text("[]")
        result = RunResult(exit_code=0, generated_files=frozenset({elsewhere.resolve()}))

        report = OutputCollector(workdir).collect(result, PLAN, workdir / "out")

        assert report.moved == []
        assert elsewhere.exists()
