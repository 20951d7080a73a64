# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""Line-scanner checks: forbidden patterns in staged files.

Matching is purely regular-expression based. A line whose trimmed text
starts with a comment marker is ignored, so commented-out code is never
reported (and occasionally real code inside block comments is missed).
"""

import os
import re
from typing import List, Optional, Sequence

from .config_loader import ConfigurationError, PatternScanConfig
from .results import CheckResult, Finding

CONSOLE_LOGS_TIP = "Remove console statements or add them to allowedPatterns in .commit-gate.yaml"
DEBUG_STATEMENTS_TIP = "Remove debugger statements and resolve merge conflicts before committing"


def compile_patterns(patterns: Sequence[str], option_name: str) -> List[re.Pattern]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as err:
            raise ConfigurationError(f"Invalid regular expression in {option_name}: {pattern!r} ({err})") from err
    return compiled


class PatternScanCheck:
    """Reports lines matching a forbidden pattern."""

    def __init__(
        self,
        name: str,
        config: PatternScanConfig,
        cwd: Optional[str] = None,
        tip: Optional[str] = None,
    ):
        self.name = name
        self.config = config
        self.cwd = cwd or os.getcwd()
        self.tip = tip

    def is_commented(self, line: str) -> bool:
        stripped = line.strip()
        return any(stripped.startswith(marker) for marker in self.config.comment_markers if marker)

    def scan_text(self, content: str, display_name: str, patterns, allowed) -> List[Finding]:
        findings = []
        for lineno, line in enumerate(content.split("\n"), 1):
            for pattern in patterns:
                match = pattern.search(line)
                if not match:
                    continue
                if any(allowed_pattern.search(line) for allowed_pattern in allowed):
                    continue
                if self.is_commented(line):
                    continue
                findings.append(
                    Finding(
                        file=display_name,
                        line=lineno,
                        text=line.strip(),
                        matched_text=match.group(0),
                    )
                )
        return findings

    def run(self, files: Sequence[str]) -> CheckResult:
        if not self.config.enabled:
            return CheckResult.disabled(self.name)

        result = CheckResult(check_name=self.name, block_commit=self.config.block_commit, tip=self.tip)
        try:
            patterns = compile_patterns(self.config.patterns, "patterns")
            allowed = compile_patterns(self.config.allowed_patterns, "allowedPatterns")
        except ConfigurationError as err:
            result.run_error = str(err)
            return result

        for file_path in files:
            display_name = os.path.relpath(os.path.join(self.cwd, file_path), self.cwd)
            try:
                with open(os.path.join(self.cwd, file_path), "r", encoding="utf-8", errors="replace") as f:
                    content = f.read()
            except OSError as err:
                result.errors.append(f"Error reading file {display_name}: {err.strerror or err}")
                continue
            result.findings.extend(self.scan_text(content, display_name, patterns, allowed))
        return result


def console_logs_check(config: PatternScanConfig, cwd: Optional[str] = None) -> PatternScanCheck:
    return PatternScanCheck("console_logs", config, cwd=cwd, tip=CONSOLE_LOGS_TIP)


def debug_statements_check(config: PatternScanConfig, cwd: Optional[str] = None) -> PatternScanCheck:
    return PatternScanCheck("debug_statements", config, cwd=cwd, tip=DEBUG_STATEMENTS_TIP)
