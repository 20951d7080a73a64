# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""Checks delegated to external tools (tsc, eslint, prettier).

Only the exit status of the tool is consulted. Its own diagnostics go
straight to the terminal because stdio is inherited.
"""

from __future__ import annotations

import os
from typing import List, Optional, Sequence

from .config_loader import ToolCheckConfig
from .results import CheckResult, Finding
from .tool_runner import ToolError, ToolRunner

LINT_EXTENSIONS = {".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"}
FORMAT_EXTENSIONS = {".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".json", ".css", ".scss", ".md"}


class ExternalToolCheck:
    """Base class: build a command, run it, map the exit status."""

    name = ""
    tip: Optional[str] = None

    def __init__(
        self,
        config: ToolCheckConfig,
        runner: Optional[ToolRunner] = None,
        cwd: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.config = config
        self.runner = runner or ToolRunner()
        self.cwd = cwd or os.getcwd()
        self.timeout = timeout

    def skip_reason(self, files: Sequence[str]) -> Optional[str]:
        """Reason to skip the tool entirely, or None to run it."""
        return None

    def build_command(self, files: Sequence[str]) -> List[str]:
        raise NotImplementedError

    def after_success(self, files: Sequence[str], result: CheckResult):
        pass

    def run(self, files: Sequence[str]) -> CheckResult:
        if not self.config.enabled:
            return CheckResult.disabled(self.name)

        result = CheckResult(check_name=self.name, block_commit=self.config.block_commit, tip=self.tip)
        reason = self.skip_reason(files)
        if reason:
            result.skipped = reason
            return result

        command = self.build_command(files)
        try:
            returncode = self.runner.run(command, cwd=self.cwd, timeout=self.timeout)
        except ToolError as err:
            result.errors.append(str(err))
            return result

        if returncode != 0:
            result.findings.append(
                Finding(file=".", message=f"'{' '.join(command[:2])}' exited with status {returncode}")
            )
        else:
            self.after_success(files, result)
        return result


class TypeScriptCheck(ExternalToolCheck):
    name = "typescript"
    tip = "Fix TypeScript errors before committing"

    def skip_reason(self, files):
        if not os.path.isfile(os.path.join(self.cwd, "tsconfig.json")):
            return "No tsconfig.json found, skipping TypeScript check"
        return None

    def build_command(self, files):
        command = ["npx", "tsc"]
        if self.config.strict:
            command.append("--strict")
        if self.config.no_emit:
            command.append("--noEmit")
        return command


class StagedFilesToolCheck(ExternalToolCheck):
    """A tool that runs on the staged files it understands."""

    extensions: set = set()

    def matching_files(self, files: Sequence[str]) -> List[str]:
        return [f for f in files if os.path.splitext(f)[1].lower() in self.extensions]

    @property
    def rewrites_files(self) -> bool:
        """True when the tool edits the working tree and re-stages it."""
        return self.config.enabled and self.config.auto_fix

    def skip_reason(self, files):
        if not self.matching_files(files):
            return f"No staged files for {self.name}"
        return None

    def after_success(self, files, result):
        """Re-stage files the tool may have rewritten."""
        if not self.config.auto_fix:
            return
        matching = self.matching_files(files)
        try:
            returncode = self.runner.run(["git", "add", "--", *matching], cwd=self.cwd, timeout=self.timeout)
        except ToolError as err:
            result.errors.append(str(err))
            return
        if returncode != 0:
            result.errors.append(f"Could not re-stage files fixed by {self.name}")


class ESLintCheck(StagedFilesToolCheck):
    name = "eslint"
    tip = "Run 'npx eslint --fix' on the reported files"
    extensions = LINT_EXTENSIONS

    def build_command(self, files):
        command = ["npx", "eslint"]
        if self.config.auto_fix:
            command.append("--fix")
        return command + self.matching_files(files)


class PrettierCheck(StagedFilesToolCheck):
    name = "prettier"
    tip = "Run 'npx prettier --write' on the reported files"
    extensions = FORMAT_EXTENSIONS

    def build_command(self, files):
        mode = "--write" if self.config.auto_fix else "--check"
        return ["npx", "prettier", mode] + self.matching_files(files)
