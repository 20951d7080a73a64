# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""Branch naming policy validation."""

import argparse
import re
import subprocess
import sys
from typing import Optional, Sequence, Tuple

from .config_loader import BranchNamingConfig, ConfigurationError, GateConfig
from .results import CheckResult, Finding

DETACHED_HEAD = "HEAD"


class BranchNameValidator:
    """Validates branch names against naming policy."""

    def __init__(self, config: BranchNamingConfig):
        self.config = config
        self.allowed_branches = set(config.allowed_branches)
        try:
            self.pattern = re.compile(config.pattern) if config.pattern else None
        except re.error as err:
            raise ConfigurationError(f"Invalid branchNaming.pattern {config.pattern!r}: {err}") from err

    @staticmethod
    def get_current_branch() -> Optional[str]:
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--abbrev-ref", "HEAD"],
                capture_output=True,
                text=True,
                check=True,
            )
            return result.stdout.strip() or None
        except (subprocess.CalledProcessError, FileNotFoundError):
            return None

    def is_allowed_branch(self, branch_name: str) -> bool:
        return branch_name in self.allowed_branches

    def validate(self, branch_name: str) -> Tuple[bool, str]:
        if self.is_allowed_branch(branch_name):
            return True, f"Allowed branch '{branch_name}' - skipped validation"
        if self.pattern is None or self.pattern.match(branch_name):
            return True, f"Valid branch name: {branch_name}"
        return False, self._generate_error_message(branch_name)

    def _generate_error_message(self, branch_name: str) -> str:
        message = f"Invalid branch name: '{branch_name}'"
        if self.config.message:
            message += f"\n  {self.config.message}"
        if self.allowed_branches:
            message += f"\n  Allowed without pattern: {', '.join(sorted(self.allowed_branches))}"
        return message


class BranchNamingCheck:
    """Runs the branch naming policy as part of the pre-commit pipeline."""

    name = "branch_naming"

    def __init__(self, config: BranchNamingConfig, branch_name: Optional[str] = None):
        self.config = config
        self.branch_name = branch_name

    def run(self, files: Sequence[str]) -> CheckResult:
        if not self.config.enabled:
            return CheckResult.disabled(self.name)

        result = CheckResult(check_name=self.name, block_commit=self.config.block_commit)
        try:
            validator = BranchNameValidator(self.config)
        except ConfigurationError as err:
            result.run_error = str(err)
            return result

        branch_name = self.branch_name or validator.get_current_branch()
        if not branch_name or branch_name == DETACHED_HEAD:
            result.skipped = "Could not determine branch name"
            return result

        is_valid, message = validator.validate(branch_name)
        if not is_valid:
            result.findings.append(Finding(file=branch_name, message=self.config.message or message))
        return result


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate git branch naming policy")
    parser.add_argument("branch", nargs="?", help="Branch name to validate")
    parser.add_argument("--config", default=None, help="Path to config file")
    parser.add_argument("-q", "--quiet", action="store_true")

    args = parser.parse_args(argv)

    try:
        config = GateConfig(args.config).branch_naming
        validator = BranchNameValidator(config)
    except ConfigurationError as err:
        print(f"Configuration error: {err}", file=sys.stderr)
        sys.exit(1)

    if not config.enabled:
        sys.exit(0)

    branch_name = args.branch or validator.get_current_branch()

    if not branch_name:
        print("Error: Could not determine branch name", file=sys.stderr)
        sys.exit(1)

    is_valid, message = validator.validate(branch_name)

    if is_valid:
        if not args.quiet:
            print(f"✔ {message}")
        sys.exit(0)
    else:
        print(message, file=sys.stderr)
        sys.exit(1 if config.block_commit else 0)


if __name__ == "__main__":
    main()
