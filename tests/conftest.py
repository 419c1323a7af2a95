"""
Shared Fixtures and Test Utilities for vanitygrind
==================================================

Provides request factories, a scripted prompt, and a fake generator that
stands in for ``subprocess.Popen`` so no real process is ever spawned by
the test suite.
"""

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
import structlog

from vanitygrind.cli.runner import close_log_file
from vanitygrind.core.models import VanityRequest

# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config files and environment overrides out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("VANITYGRIND_CONFIG", raising=False)
    monkeypatch.delenv("VANITYGRIND_GENERATOR", raising=False)
    yield
    close_log_file()
    structlog.reset_defaults()


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    """A clean working directory that is also the process cwd."""
    d = tmp_path / "work"
    d.mkdir()
    monkeypatch.chdir(d)
    return d


# ---------------------------------------------------------------------------
# Request factory
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_request() -> Callable[..., VanityRequest]:
    """Factory for requests with sensible defaults (prefix 'Sun', count 1)."""

    def _make(**overrides) -> VanityRequest:
        fields = {
            "address_type": "prefix",
            "prefix": "Sun",
            "suffix": "",
            "count": 1,
        }
        fields.update(overrides)
        return VanityRequest(**fields)

    return _make


# ---------------------------------------------------------------------------
# Scripted prompts
# ---------------------------------------------------------------------------


class ScriptedAsk:
    """Callable prompt that replays canned replies and records the questions."""

    def __init__(self, replies: Iterable[str]):
        self.replies = list(replies)
        self.questions: list[str] = []

    def __call__(self, message: str) -> str:
        self.questions.append(message)
        if not self.replies:
            raise EOFError
        return self.replies.pop(0)


@pytest.fixture()
def scripted_ask() -> Callable[..., ScriptedAsk]:
    def _make(*replies: str) -> ScriptedAsk:
        return ScriptedAsk(replies)

    return _make


# ---------------------------------------------------------------------------
# Fake generator
# ---------------------------------------------------------------------------


class FakeGenerator:
    """Replacement for ``subprocess.Popen`` used by the process runner.

    On ``wait()`` it writes ``files`` into the child's cwd, runs ``on_wait``
    (if any), and returns ``returncode``.
    """

    def __init__(
        self,
        returncode: int = 0,
        files: Iterable[str] = (),
        on_wait: Callable[[Path], None] | None = None,
    ):
        self.returncode = returncode
        self.files = list(files)
        self.on_wait = on_wait
        self.calls: list[dict] = []

    def __call__(self, argv, cwd=None, **kwargs):
        self.calls.append({"argv": list(argv), "cwd": cwd, "kwargs": kwargs})
        return _FakeProcess(self, Path(cwd) if cwd else Path.cwd())


class _FakeProcess:
    def __init__(self, generator: FakeGenerator, cwd: Path):
        self.generator = generator
        self.cwd = cwd

    def wait(self):
        for name in self.generator.files:
            (self.cwd / name).write_text('[1, 2, 3]')
        if self.generator.on_wait is not None:
            self.generator.on_wait(self.cwd)
        return self.generator.returncode


@pytest.fixture()
def fake_generator(monkeypatch) -> Callable[..., FakeGenerator]:
    """Install a FakeGenerator in place of subprocess.Popen."""

    def _install(**kwargs) -> FakeGenerator:
        generator = FakeGenerator(**kwargs)
        monkeypatch.setattr("vanitygrind.core.process.subprocess.Popen", generator)
        return generator

    return _install


@pytest.fixture()
def forbid_spawn(monkeypatch):
    """Fail the test if anything tries to start a process."""

    def _fail(*args, **kwargs):
        raise AssertionError(f"Unexpected process spawn: {args!r}")

    monkeypatch.setattr("vanitygrind.core.process.subprocess.Popen", _fail)
    monkeypatch.setattr("vanitygrind.core.process.subprocess.run", _fail)


@pytest.fixture()
def generator_installed(monkeypatch):
    """Pretend the generator is installed and answers --version."""
    monkeypatch.setattr(
        "vanitygrind.cli.runner.probe_generator",
        lambda binary: f"{binary} 1.18.26",
    )
