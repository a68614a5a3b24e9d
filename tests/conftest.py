"""Shared test fixtures for lintscope."""

import json
import logging
import shutil

import pytest

from lintscope.exceptions import ErrorCode, VCSError
from lintscope import logging_config
from lintscope.logging_config import LOGGER_NAME, set_log_file


class FakeRunner:
    """CommandRunner returning canned output per command.

    Commands without a canned response print nothing. Commands listed in
    ``failures`` raise VCSError as if git could not be spawned.
    """

    def __init__(self, responses=None, failures=()):
        self.responses = {tuple(k): v for k, v in (responses or {}).items()}
        self.failures = {tuple(f) for f in failures}
        self.calls = []

    def run(self, cwd, args):
        key = tuple(args)
        self.calls.append((str(cwd), key))
        if key in self.failures:
            raise VCSError(f"Cannot run {' '.join(key)}", ErrorCode.LS200)
        return self.responses.get(key, "")

    def commands(self):
        return [args for _, args in self.calls]


def pytest_configure(config):
    """Register the git marker."""
    config.addinivalue_line("markers", "git: test drives a real git binary")


def pytest_collection_modifyitems(config, items):
    """Skip git tests when git is not installed."""
    if shutil.which("git"):
        return
    skip_git = pytest.mark.skip(reason="git executable not found")
    for item in items:
        if item.get_closest_marker("git") is not None:
            item.add_marker(skip_git)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Restore host logging defaults: no log mirror, stdout console at INFO."""
    yield
    set_log_file(None)
    logger = logging.getLogger(LOGGER_NAME)
    logging_config._install_console_handler(
        logger, logging_config._make_console_handler(stderr=False, verbose=False)
    )
    logger.setLevel(logging.DEBUG)


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def write_config(tmp_path):
    """Write custom-lint-config.json into tmp_path and return the project dir."""

    def _write(data, project=None):
        project = project or tmp_path
        project.mkdir(parents=True, exist_ok=True)
        text = data if isinstance(data, str) else json.dumps(data)
        (project / "custom-lint-config.json").write_text(text, encoding="utf-8")
        return project

    return _write
