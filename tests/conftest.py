"""Shared test fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to path for package imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SOCKSTAT_PATH = "/proc/net/sockstat"


class MockContext:
    """Mock Context for testing without real system access."""

    def __init__(
        self,
        file_contents: dict[str, str | Exception] | None = None,
        unreadable: list[str] | None = None,
        clock_step: float = 0.5,
    ):
        self.file_contents = file_contents or {}
        self.unreadable = set(unreadable or [])
        self.clock_step = clock_step
        self.files_read: list[str] = []
        self._clock = 0.0

    def read_file(self, path: str) -> str:
        """Return mocked file content, or raise a mocked error."""
        self.files_read.append(path)
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")

        content = self.file_contents[path]
        if isinstance(content, Exception):
            raise content
        return content

    def is_readable(self, path: str) -> bool:
        """Mocked files are readable unless listed as unreadable."""
        return path in self.file_contents and path not in self.unreadable

    def monotonic(self) -> float:
        """Return a clock that advances clock_step per call."""
        now = self._clock
        self._clock += self.clock_step
        return now


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep real user and project config files out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    return tmp_path


def load_fixture(category: str, name: str) -> str:
    """Load a fixture file by category and name."""
    fixture_path = FIXTURES_DIR / category / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()
