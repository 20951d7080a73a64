"""Shared fixtures for commit-gate tests."""
import pytest

from commit_gate.config_loader import GateConfig
from commit_gate.tool_runner import ToolRunner

CHECK_KEYS = [
    "eslint",
    "prettier",
    "typescript",
    "consoleLogs",
    "debugStatements",
    "fileSize",
    "branchNaming",
    "commitMessage",
]


class FakeRunner(ToolRunner):
    """Records commands instead of running them."""

    def __init__(self, returncodes=None, error=None):
        self.returncodes = returncodes or {}
        self.error = error
        self.calls = []

    def run(self, args, cwd=None, timeout=None):
        self.calls.append({"args": list(args), "cwd": cwd, "timeout": timeout})
        if self.error is not None:
            raise self.error
        # Most specific key wins: full command, then "tool subcommand", then tool
        for key in (" ".join(args), " ".join(args[:2]), args[0]):
            if key in self.returncodes:
                return self.returncodes[key]
        return 0


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def make_config():
    """Build a config with every check disabled except the ones given."""

    def _make(checks=None, **sections):
        overrides = {"checks": {name: {"enabled": False} for name in CHECK_KEYS}}
        for name, values in (checks or {}).items():
            overrides["checks"][name] = {"enabled": True, **values}
        overrides.update(sections)
        return GateConfig.from_dict(overrides)

    return _make


@pytest.fixture
def make_runner():
    return FakeRunner
