# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""File size limits for staged files."""

import os
from typing import Optional, Sequence

from .config_loader import ConfigurationError, FileSizeConfig
from .results import CheckResult, Finding
from .size_policy import SizePolicy, format_bytes

FILE_SIZE_TIP = (
    "Compress images or move large files to Git LFS\n"
    "   Resources:\n"
    "   - Image compression: https://tinypng.com\n"
    "   - Git LFS: https://git-lfs.github.com"
)


class FileSizeCheck:
    """Reports staged files larger than their configured limit."""

    name = "file_size"

    def __init__(self, config: FileSizeConfig, cwd: Optional[str] = None):
        self.config = config
        self.cwd = cwd or os.getcwd()
        self.policy = SizePolicy(config.limits)

    def run(self, files: Sequence[str]) -> CheckResult:
        if not self.config.enabled:
            return CheckResult.disabled(self.name)

        result = CheckResult(check_name=self.name, block_commit=self.config.block_commit, tip=FILE_SIZE_TIP)
        for file_path in files:
            full_path = os.path.join(self.cwd, file_path)
            display_name = os.path.relpath(full_path, self.cwd)
            try:
                file_size = os.stat(full_path).st_size
            except OSError as err:
                result.errors.append(f"Error checking file {display_name}: {err.strerror or err}")
                continue

            try:
                limit = self.policy.resolve_limit(file_path)
            except ConfigurationError as err:
                result.run_error = str(err)
                break

            if file_size > limit:
                result.findings.append(
                    Finding(
                        file=display_name,
                        size=file_size,
                        limit=limit,
                        message=f"Size: {format_bytes(file_size)} (Max: {format_bytes(limit)})",
                    )
                )
        return result
