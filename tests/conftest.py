"""Pytest configuration and shared fixtures for the mdterm test suite.

Rendering tests use a fixed capability table whose entries are readable
markers (``<bold>``, ``<setf 2>``...) so expected output can be written out
byte for byte without a real terminal.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mdterm.renderers.terminal import TerminalRenderer
from mdterm.terminal.capabilities import TableBackend

settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

TEST_CAPABILITIES = {
    "bold": b"<bold>",
    "smul": b"<smul>",
    "sgr0": b"<sgr0>",
    "setf": b"<setf %d>",
}


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def test_backend() -> TableBackend:
    """Capability backend emitting readable markers."""
    return TableBackend(TEST_CAPABILITIES, name="test")


@pytest.fixture
def renderer(test_backend) -> TerminalRenderer:
    """Terminal renderer wired to the marker backend."""
    return TerminalRenderer(backend=test_backend)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate a test from MDTERM_* variables, NO_COLOR and real config files."""
    for key in list(os.environ):
        if key.startswith("MDTERM_") or key == "NO_COLOR":
            monkeypatch.delenv(key, raising=False)
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr("pathlib.Path.home", classmethod(lambda cls: home))
    monkeypatch.chdir(work)
    return work
