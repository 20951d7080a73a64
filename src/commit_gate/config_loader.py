# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""Configuration loader for commit-gate.

Loads configuration from .commit-gate.yaml and deep-merges it over the
documented defaults. Every check receives its own immutable record.
"""

from __future__ import annotations

import copy
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import yaml


class ConfigurationError(Exception):
    """Raised when the configuration cannot be used as given."""


class Severity:
    """Severity levels used for reporting."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    COLORS = {ERROR: "\033[91m", WARNING: "\033[93m", INFO: "\033[94m"}
    SUCCESS = "\033[92m"
    MUTED = "\033[90m"
    RESET = "\033[0m"
    BOLD = "\033[1m"
    # ASCII-safe icons for CI environments
    ICONS = {ERROR: "[ERROR]", WARNING: "[WARN]", INFO: "[INFO]"}
    ICONS_UNICODE = {ERROR: "❌", WARNING: "⚠️", INFO: "\U0001f4a1"}


DEFAULT_CONSOLE_PATTERNS: list[str] = [
    r"console\.(log|debug|info|warn|error|trace|dir|table|time|timeEnd|group|groupEnd)\(",
]

DEFAULT_CONSOLE_ALLOWED_PATTERNS: list[str] = [
    r"// eslint-disable-next-line no-console",
    r"/\* eslint-disable no-console \*/",
    r"logger\.",
    r"winston\.",
]

DEFAULT_DEBUG_PATTERNS: list[str] = [
    r"\bdebugger;",
    r"\bbreakpoint\(\)",
    r"^\s*import pdb\b",
    r"^(<{7}|>{7})( |$)",
]

DEFAULT_COMMENT_MARKERS: list[str] = ["//", "*"]

DEFAULT_CONFIG: dict = {
    "checks": {
        "eslint": {
            "enabled": True,
            "autoFix": True,
            "blockCommit": True,
        },
        "prettier": {
            "enabled": True,
            "autoFix": True,
            "blockCommit": True,
        },
        "typescript": {
            "enabled": False,
            "strict": False,
            "noEmit": True,
            "blockCommit": True,
        },
        "consoleLogs": {
            "enabled": False,
            "blockCommit": False,
            "patterns": DEFAULT_CONSOLE_PATTERNS,
            "allowedPatterns": DEFAULT_CONSOLE_ALLOWED_PATTERNS,
            "commentMarkers": DEFAULT_COMMENT_MARKERS,
        },
        "debugStatements": {
            "enabled": False,
            "blockCommit": True,
            "patterns": DEFAULT_DEBUG_PATTERNS,
            "allowedPatterns": [],
            "commentMarkers": DEFAULT_COMMENT_MARKERS,
        },
        "fileSize": {
            "enabled": True,
            "blockCommit": True,
            "limits": {
                "default": "5mb",
                "images": "2mb",
                ".png": "2mb",
                ".jpg": "2mb",
                ".jpeg": "2mb",
                ".gif": "3mb",
                ".svg": "500kb",
                ".ico": "100kb",
                "videos": "50mb",
                "documents": "10mb",
                ".pdf": "10mb",
                ".js": "1mb",
                ".ts": "1mb",
                ".css": "500kb",
            },
        },
        "branchNaming": {
            "enabled": True,
            "blockCommit": False,
            "pattern": r"^(main|master|develop|staging|production|feature|bugfix|hotfix|release|chore)/[a-z0-9-]+$",
            "allowedBranches": ["main", "master", "develop", "staging", "production"],
            "message": "Branch name should follow the pattern: type/description (e.g., feature/add-login)",
        },
        "commitMessage": {
            "enabled": True,
            "blockCommit": True,
            "pattern": r"^(feat|fix|docs|style|refactor|perf|test|build|ci|chore|revert)(\(.+\))?: .{1,100}$",
            "message": "Commit message must follow Conventional Commits format",
            "examples": [
                "feat: add user authentication",
                "fix(api): resolve memory leak in data processing",
                "docs: update README with installation steps",
            ],
        },
    },
    "notifications": {
        "enabled": True,
        "showTips": True,
        "showWarnings": True,
        "showErrors": True,
    },
    "performance": {
        "parallel": False,
        "maxWorkers": 4,
        "timeout": 60000,
    },
    "customHooks": {
        "before": [],
        "after": [],
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Return a copy of ``base`` with ``override`` merged into it.

    Nested mappings merge key by key; any other value replaces the default.
    An empty section (None) over a mapping keeps the mapping.
    """
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if value is None and isinstance(merged.get(key), dict):
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


@dataclass(frozen=True)
class ToolCheckConfig:
    """Settings shared by the external-tool delegates."""

    enabled: bool = True
    block_commit: bool = True
    auto_fix: bool = False
    strict: bool = False
    no_emit: bool = True


@dataclass(frozen=True)
class PatternScanConfig:
    """Settings for a line-scanner check."""

    enabled: bool = False
    block_commit: bool = False
    patterns: tuple = ()
    allowed_patterns: tuple = ()
    comment_markers: tuple = tuple(DEFAULT_COMMENT_MARKERS)


@dataclass(frozen=True)
class FileSizeConfig:
    enabled: bool = True
    block_commit: bool = True
    limits: dict = field(default_factory=dict)


@dataclass(frozen=True)
class BranchNamingConfig:
    enabled: bool = True
    block_commit: bool = False
    pattern: str = ""
    allowed_branches: tuple = ()
    message: str = ""


@dataclass(frozen=True)
class CommitMessageConfig:
    enabled: bool = True
    block_commit: bool = True
    pattern: str = ""
    message: str = ""
    examples: tuple = ()


@dataclass(frozen=True)
class NotificationsConfig:
    enabled: bool = True
    show_tips: bool = True
    show_warnings: bool = True
    show_errors: bool = True


@dataclass(frozen=True)
class PerformanceConfig:
    parallel: bool = False
    max_workers: int = 4
    timeout: int = 60000

    @property
    def timeout_seconds(self) -> float | None:
        """Process timeout in seconds, or None when disabled."""
        if not self.timeout or self.timeout <= 0:
            return None
        return self.timeout / 1000.0


def _as_tuple(value) -> tuple:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


class GateConfig:
    """Configuration manager for commit-gate."""

    CONFIG_FILES = [".commit-gate.yaml", ".commit-gate.yml", "commit-gate.yaml"]

    def __init__(self, config_path: str | None = None, overrides: dict | None = None):
        self.config_file: Path | None = None
        loaded = self._load_config(config_path)
        if overrides:
            loaded = deep_merge(loaded, overrides)
        self.config: dict = deep_merge(DEFAULT_CONFIG, loaded)
        self._init_settings()

    @classmethod
    def from_dict(cls, overrides: dict) -> GateConfig:
        """Build a configuration from an in-memory mapping, skipping file lookup."""
        instance = cls.__new__(cls)
        instance.config_file = None
        instance.config = deep_merge(DEFAULT_CONFIG, overrides or {})
        instance._init_settings()
        return instance

    def _load_config(self, config_path: str | None = None) -> dict:
        """Load configuration from .commit-gate.yaml."""
        if config_path:
            search_paths = [Path(config_path)]
            if not search_paths[0].exists():
                raise ConfigurationError(f"Config file not found: {config_path}")
        else:
            current = Path.cwd()
            search_paths = []
            for _ in range(5):
                for config_name in self.CONFIG_FILES:
                    search_paths.append(current / config_name)
                current = current.parent

        for path in search_paths:
            if path.exists():
                try:
                    with open(path, "r", encoding="utf-8") as f:
                        data = yaml.safe_load(f) or {}
                except (yaml.YAMLError, OSError) as err:
                    raise ConfigurationError(f"Could not load {path}: {err}") from err
                if not isinstance(data, dict):
                    raise ConfigurationError(f"{path} must contain a mapping at the top level")
                self.config_file = path
                return data
        return {}

    def _section(self, *keys: str) -> dict:
        node = self.config
        for depth, key in enumerate(keys, 1):
            node = node.get(key)
            if node is None:
                node = {}
            elif not isinstance(node, dict):
                option = ".".join(keys[:depth])
                raise ConfigurationError(f"{option} must be a mapping, got {type(node).__name__}")
        return node

    @staticmethod
    def _int_option(section: dict, key: str, option: str) -> int:
        value = section.get(key) or 0
        try:
            return int(value)
        except (TypeError, ValueError) as err:
            raise ConfigurationError(f"{option} must be a number, got {value!r}") from err

    def _init_settings(self):
        """Initialize all settings from config."""
        self.eslint = self._tool_config("eslint")
        self.prettier = self._tool_config("prettier")
        self.typescript = self._tool_config("typescript")
        self.console_logs = self._pattern_config("consoleLogs")
        self.debug_statements = self._pattern_config("debugStatements")

        file_size = self._section("checks", "fileSize")
        limits = file_size.get("limits") or {}
        if not isinstance(limits, dict):
            raise ConfigurationError(f"checks.fileSize.limits must be a mapping, got {limits!r}")
        self.file_size = FileSizeConfig(
            enabled=bool(file_size.get("enabled", True)),
            block_commit=bool(file_size.get("blockCommit", True)),
            limits=dict(limits),
        )

        branch = self._section("checks", "branchNaming")
        self.branch_naming = BranchNamingConfig(
            enabled=bool(branch.get("enabled", True)),
            block_commit=bool(branch.get("blockCommit", False)),
            pattern=branch.get("pattern") or "",
            allowed_branches=_as_tuple(branch.get("allowedBranches")),
            message=branch.get("message") or "",
        )

        commit = self._section("checks", "commitMessage")
        self.commit_message = CommitMessageConfig(
            enabled=bool(commit.get("enabled", True)),
            block_commit=bool(commit.get("blockCommit", True)),
            pattern=commit.get("pattern") or "",
            message=commit.get("message") or "",
            examples=_as_tuple(commit.get("examples")),
        )

        notifications = self._section("notifications")
        self.notifications = NotificationsConfig(
            enabled=bool(notifications.get("enabled", True)),
            show_tips=bool(notifications.get("showTips", True)),
            show_warnings=bool(notifications.get("showWarnings", True)),
            show_errors=bool(notifications.get("showErrors", True)),
        )

        performance = self._section("performance")
        self.performance = PerformanceConfig(
            parallel=bool(performance.get("parallel", False)),
            max_workers=max(1, self._int_option(performance, "maxWorkers", "performance.maxWorkers") or 1),
            timeout=self._int_option(performance, "timeout", "performance.timeout"),
        )

        hooks = self._section("customHooks")
        self.before_hooks: tuple = _as_tuple(hooks.get("before"))
        self.after_hooks: tuple = _as_tuple(hooks.get("after"))

    def _tool_config(self, name: str) -> ToolCheckConfig:
        section = self._section("checks", name)
        return ToolCheckConfig(
            enabled=bool(section.get("enabled", True)),
            block_commit=bool(section.get("blockCommit", True)),
            auto_fix=bool(section.get("autoFix", False)),
            strict=bool(section.get("strict", False)),
            no_emit=section.get("noEmit") is not False,
        )

    def _pattern_config(self, name: str) -> PatternScanConfig:
        section = self._section("checks", name)
        return PatternScanConfig(
            enabled=bool(section.get("enabled", False)),
            block_commit=bool(section.get("blockCommit", False)),
            patterns=_as_tuple(section.get("patterns")),
            allowed_patterns=_as_tuple(section.get("allowedPatterns")),
            comment_markers=_as_tuple(section.get("commentMarkers", DEFAULT_COMMENT_MARKERS)),
        )


class StagedFilesDetector:
    """Asks git which files are staged for the current commit."""

    def get_staged_files(self) -> list[str]:
        try:
            result = subprocess.run(
                ["git", "diff", "--cached", "--name-only", "--diff-filter=ACMR", "-z"],
                capture_output=True,
                encoding="utf-8",
                check=True,
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            return []
        # -z keeps paths unquoted, so non-ASCII names reach the checks as-is
        return [f for f in result.stdout.split("\0") if f]

