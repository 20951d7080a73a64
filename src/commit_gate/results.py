# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""Findings and per-check results produced by a single hook invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Finding:
    """A single reported violation."""

    file: str
    line: Optional[int] = None
    text: Optional[str] = None
    matched_text: Optional[str] = None
    size: Optional[int] = None
    limit: Optional[int] = None
    message: Optional[str] = None

    def location(self) -> str:
        if self.line is not None:
            return f"{self.file}:{self.line}"
        return self.file


@dataclass
class CheckResult:
    """Outcome of one check against the staged file list."""

    check_name: str
    block_commit: bool = False
    findings: List[Finding] = field(default_factory=list)
    # Operator-facing problems (unreadable file, tool timeout); never blocking
    errors: List[str] = field(default_factory=list)
    # The check could not run at all
    run_error: Optional[str] = None
    skipped: Optional[str] = None
    tip: Optional[str] = None

    @property
    def has_findings(self) -> bool:
        return len(self.findings) > 0

    @property
    def blocks(self) -> bool:
        """Whether this result fails the commit.

        A check that failed to run (bad configuration, crash) always blocks.
        """
        if self.run_error:
            return True
        return self.has_findings and self.block_commit

    @property
    def passed(self) -> bool:
        return not self.has_findings and not self.run_error and not self.errors

    @classmethod
    def disabled(cls, check_name: str) -> CheckResult:
        return cls(check_name=check_name, skipped="disabled")
