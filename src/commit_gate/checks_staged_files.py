# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""Main orchestrator: run every enabled check against the staged files."""

import argparse
import os
import shlex
import sys
import time
from concurrent.futures import ThreadPoolExecutor

from .checks_branch_name import BranchNamingCheck
from .checks_file_size import FileSizeCheck
from .checks_patterns import console_logs_check, debug_statements_check
from .checks_tools import ESLintCheck, PrettierCheck, TypeScriptCheck
from .config_loader import ConfigurationError, GateConfig, Severity, StagedFilesDetector
from .results import CheckResult, Finding
from .size_policy import format_bytes
from .tool_runner import ToolError, ToolRunner

# Execution and report order
CHECK_ORDER = (
    "branch_naming",
    "eslint",
    "prettier",
    "console_logs",
    "debug_statements",
    "file_size",
    "typescript",
)


# =============================================================================
# OUTPUT
# =============================================================================


class ResultPrinter:
    """Pretty printer for check results."""

    MAX_MESSAGE_LENGTH = 200

    def __init__(self, notifications, use_colors=True, use_unicode=None, stream=None):
        self.notifications = notifications
        self.stream = stream or sys.stdout
        isatty = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.use_colors = use_colors and isatty
        # Auto-detect unicode support: use ASCII in CI, unicode in terminal
        if use_unicode is None:
            self.use_unicode = isatty and os.environ.get("CI") is None
        else:
            self.use_unicode = use_unicode

    def _print(self, text=""):
        print(text, file=self.stream)

    def _get_icon(self, severity):
        if self.use_unicode:
            return Severity.ICONS_UNICODE.get(severity, "")
        return Severity.ICONS.get(severity, "")

    def _color(self, text, color):
        if self.use_colors:
            return f"{color}{text}{Severity.RESET}"
        return text

    def _bold(self, text):
        if self.use_colors:
            return f"{Severity.BOLD}{text}{Severity.RESET}"
        return text

    def _truncate(self, text):
        if len(text) > self.MAX_MESSAGE_LENGTH:
            return text[: self.MAX_MESSAGE_LENGTH - 3] + "..."
        return text

    @staticmethod
    def _format_check_name(check_name):
        return check_name.replace("_", " ").title()

    @property
    def enabled(self):
        return self.notifications.enabled

    def print_result(self, result):
        if not self.enabled:
            return
        check_display = self._format_check_name(result.check_name)
        error_color = Severity.COLORS[Severity.ERROR]
        warning_color = Severity.COLORS[Severity.WARNING]

        if result.skipped:
            if result.skipped != "disabled" and self.notifications.show_warnings:
                icon = self._get_icon(Severity.WARNING)
                self._print(self._color(f"{icon} {check_display}: {result.skipped}", warning_color))
            return

        if self.notifications.show_errors:
            if result.run_error:
                icon = self._get_icon(Severity.ERROR)
                self._print(self._color(f"{icon} {check_display} could not run: {result.run_error}", error_color))
            for error in result.errors:
                self._print(self._color(f"{self._get_icon(Severity.ERROR)} {error}", error_color))

        if result.has_findings:
            if result.blocks and not self.notifications.show_errors:
                return
            if not result.blocks and not self.notifications.show_warnings:
                return
            self._print_findings(result, check_display)
        elif result.passed:
            self._print(self._color(f"✔ {check_display} passed", Severity.SUCCESS))

    def _print_findings(self, result, check_display):
        severity = Severity.ERROR if result.blocks else Severity.WARNING
        color = Severity.COLORS[severity]
        label = "[BLOCKING]" if result.blocks else "(not blocking)"

        self._print("")
        header = f"{self._get_icon(severity)} {check_display} ({len(result.findings)}) {label}"
        self._print(self._color(self._bold(header), color))
        for finding in result.findings:
            self._print_finding(finding)

        if result.tip and self.notifications.show_tips:
            self._print(self._color(f"{self._get_icon(Severity.INFO)} Tip: {result.tip}", Severity.COLORS[Severity.WARNING]))
        self._print("")

    def _print_finding(self, finding: Finding):
        self._print(self._color(f"  {finding.location()}", Severity.COLORS[Severity.WARNING]))
        if finding.text:
            self._print(self._color(f"    {self._truncate(finding.text)}", Severity.MUTED))
        if finding.matched_text:
            self._print(self._color(f"    Found: {finding.matched_text}", Severity.COLORS[Severity.ERROR]))
        if finding.size is not None and finding.limit is not None:
            size = self._color(format_bytes(finding.size), Severity.COLORS[Severity.ERROR])
            limit = self._color(format_bytes(finding.limit), Severity.SUCCESS)
            self._print(f"    Size: {size} (Max: {limit})")
        elif finding.message:
            self._print(f"    {self._truncate(finding.message)}")

    def print_summary(self, results, elapsed_time):
        if not self.enabled:
            return
        ran = [r for r in results if not r.skipped]
        blocking = [r for r in ran if r.blocks]
        warnings = [r for r in ran if r.has_findings and not r.blocks]
        self._print("-" * 50)
        parts = [
            self._color(f"{len(blocking)} blocking", Severity.COLORS[Severity.ERROR]),
            self._color(f"{len(warnings)} not blocking", Severity.COLORS[Severity.WARNING]),
            f"{len(ran)} checks run",
        ]
        self._print(f"Summary: {' | '.join(parts)} ({elapsed_time:.2f}s)")

    def print_blocking_notice(self):
        color = Severity.COLORS[Severity.ERROR]
        self._print("")
        self._print(self._color("=" * 60, color))
        self._print(self._color("COMMIT BLOCKED - Fix the issues above and try again", color))
        self._print(self._color("=" * 60, color))
        self._print("")

    def print_success(self):
        if not self.enabled:
            return
        self._print(self._color("All pre-commit checks passed!", Severity.SUCCESS))


# =============================================================================
# ORCHESTRATION
# =============================================================================


class ChecksStagedFiles:
    """Runs the configured checks against one list of staged files."""

    def __init__(self, config, files, cwd=None, runner=None, only=None, branch_name=None):
        self.config = config
        self.files = list(files)
        self.cwd = cwd or os.getcwd()
        self.runner = runner or ToolRunner()
        self.only = set(only) if only else None
        self.branch_name = branch_name

    def _build_check(self, check_name):
        timeout = self.config.performance.timeout_seconds
        if check_name == "branch_naming":
            return BranchNamingCheck(self.config.branch_naming, branch_name=self.branch_name)
        if check_name == "eslint":
            return ESLintCheck(self.config.eslint, self.runner, self.cwd, timeout)
        if check_name == "prettier":
            return PrettierCheck(self.config.prettier, self.runner, self.cwd, timeout)
        if check_name == "console_logs":
            return console_logs_check(self.config.console_logs, cwd=self.cwd)
        if check_name == "debug_statements":
            return debug_statements_check(self.config.debug_statements, cwd=self.cwd)
        if check_name == "file_size":
            return FileSizeCheck(self.config.file_size, cwd=self.cwd)
        if check_name == "typescript":
            return TypeScriptCheck(self.config.typescript, self.runner, self.cwd, timeout)
        raise ValueError(f"Unknown check: {check_name}")

    def get_checks(self):
        for check_name in CHECK_ORDER:
            if self.only is not None and check_name not in self.only:
                continue
            yield self._build_check(check_name)

    def run_check(self, check):
        try:
            return check.run(self.files)
        except Exception as err:
            return CheckResult(check_name=check.name, run_error=f"{type(err).__name__}: {err}")

    def run_checks(self):
        """Run every selected check; results come back in CHECK_ORDER."""
        checks = list(self.get_checks())
        performance = self.config.performance
        if not performance.parallel or len(checks) < 2:
            return [self.run_check(check) for check in checks]

        # Fixers share the working tree and the git index, so they run one at a
        # time and finish before any other check reads the files.
        results = {}
        for check in checks:
            if getattr(check, "rewrites_files", False):
                results[check.name] = self.run_check(check)
        pending = [check for check in checks if check.name not in results]
        with ThreadPoolExecutor(max_workers=performance.max_workers) as executor:
            for check, result in zip(pending, executor.map(self.run_check, pending)):
                results[check.name] = result
        return [results[check.name] for check in checks]

    def run_custom_hooks(self, stage, commands):
        """Run user commands from customHooks; any failure blocks the commit."""
        result = CheckResult(check_name=f"{stage}_hooks", block_commit=True)
        if not commands:
            result.skipped = "disabled"
            return result
        for command in commands:
            try:
                args = shlex.split(command)
                returncode = self.runner.run(args, cwd=self.cwd, timeout=self.config.performance.timeout_seconds)
            except (ToolError, ValueError) as err:
                result.findings.append(Finding(file=command, message=str(err)))
                continue
            if returncode != 0:
                result.findings.append(Finding(file=command, message=f"exited with status {returncode}"))
        return result


def run(
    files=None,
    config=None,
    config_path=None,
    only=None,
    verbose=True,
    use_colors=True,
    do_exit=True,
    runner=None,
    cwd=None,
    branch_name=None,
):
    """Main entry point."""
    start_time = time.time()

    if config is None:
        try:
            config = GateConfig(config_path)
        except ConfigurationError as err:
            print(f"Configuration error: {err}", file=sys.stderr)
            if do_exit:
                sys.exit(1)
            return [], 1

    if files is None:
        files = StagedFilesDetector().get_staged_files()

    printer = ResultPrinter(config.notifications, use_colors=use_colors)
    orchestrator = ChecksStagedFiles(config, files, cwd=cwd, runner=runner, only=only, branch_name=branch_name)

    all_results = []
    before = orchestrator.run_custom_hooks("before", config.before_hooks)
    all_results.append(before)

    for result in orchestrator.run_checks():
        all_results.append(result)

    has_blocking = any(result.blocks for result in all_results)
    if not has_blocking:
        all_results.append(orchestrator.run_custom_hooks("after", config.after_hooks))
        has_blocking = all_results[-1].blocks

    if verbose:
        for result in all_results:
            printer.print_result(result)
        printer.print_summary(all_results, time.time() - start_time)
        if has_blocking:
            printer.print_blocking_notice()
        else:
            printer.print_success()

    exit_code = 1 if has_blocking else 0

    if do_exit:
        sys.exit(exit_code)

    return all_results, exit_code


def main(argv=None):
    """Console entry point."""
    parser = argparse.ArgumentParser(description="commit-gate: pre-commit checks for staged files")
    parser.add_argument("files", nargs="*", help="Staged files to check (default: ask git)")
    parser.add_argument("--config", default=None, help="Path to config file")
    parser.add_argument(
        "--check",
        action="append",
        choices=CHECK_ORDER,
        default=None,
        help="Run only this check (repeatable)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output")

    args = parser.parse_args(argv)

    return run(
        files=args.files or None,
        config_path=args.config,
        only=args.check,
        verbose=not args.quiet,
        use_colors=not args.no_color,
    )
