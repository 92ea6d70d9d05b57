"""Test configuration and fixtures for treeconcat."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def make_files(tmp_path):
    """Create files and directories below tmp_path from a mapping.

    Keys are posix paths relative to tmp_path. A key ending in "/" creates an empty
    directory; any other key creates a file with the value as its content.
    """

    def _make(entries):
        for relative, content in entries.items():
            path = tmp_path / relative
            if relative.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content)
        return tmp_path

    return _make
