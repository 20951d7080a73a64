# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""Running external tools (tsc, eslint, prettier, custom hooks)."""

from __future__ import annotations

import subprocess
from typing import Sequence


class ToolError(Exception):
    """The tool could not be run to completion."""


class ToolTimeout(ToolError):
    pass


class ToolRunner:
    """Runs a command with inherited stdio and returns its exit status.

    Checks receive a runner instead of calling subprocess directly so tests
    can substitute a fake.
    """

    def run(self, args: Sequence[str], cwd: str | None = None, timeout: float | None = None) -> int:
        try:
            completed = subprocess.run(list(args), cwd=cwd, timeout=timeout, check=False)
        except subprocess.TimeoutExpired as err:
            raise ToolTimeout(f"'{' '.join(args)}' timed out after {timeout:g}s") from err
        except OSError as err:
            raise ToolError(f"Could not run '{args[0]}': {err}") from err
        return completed.returncode
