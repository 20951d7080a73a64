# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""
commit-gate
Pre-commit validation pipeline for staged files

Features:
- YAML configuration deep-merged over documented defaults
- Per-check enabled / blockCommit flags
- Non-blocking findings are still reported
- Optional parallel execution with a stable report order

Checks included:
- Branch naming, commit message (Conventional Commits by default)
- ESLint, Prettier, TypeScript (delegated to external tools)
- Console statements, debug statements (line scanning)
- File size limits per extension / category
"""

__version__ = "1.0.0"
__author__ = "Soltein SA de CV"

from .checks_branch_name import BranchNameValidator, BranchNamingCheck
from .checks_commit_message import CommitMessageValidator
from .checks_file_size import FileSizeCheck
from .checks_patterns import PatternScanCheck
from .checks_staged_files import ChecksStagedFiles
from .checks_staged_files import run as run_checks
from .checks_tools import ESLintCheck, PrettierCheck, TypeScriptCheck
from .config_loader import ConfigurationError, GateConfig, Severity, StagedFilesDetector
from .results import CheckResult, Finding
from .size_policy import InvalidSizeFormat, SizePolicy, UnknownSizeUnit, format_bytes, parse_size
from .tool_runner import ToolError, ToolRunner, ToolTimeout

__all__ = [
    # Main classes
    "ChecksStagedFiles",
    "BranchNameValidator",
    "BranchNamingCheck",
    "CommitMessageValidator",
    "FileSizeCheck",
    "PatternScanCheck",
    "ESLintCheck",
    "PrettierCheck",
    "TypeScriptCheck",
    "CheckResult",
    "Finding",
    # Config
    "GateConfig",
    "Severity",
    "StagedFilesDetector",
    "SizePolicy",
    # Errors
    "ConfigurationError",
    "InvalidSizeFormat",
    "UnknownSizeUnit",
    "ToolError",
    "ToolTimeout",
    # Functions
    "run_checks",
    "parse_size",
    "format_bytes",
    "ToolRunner",
]
