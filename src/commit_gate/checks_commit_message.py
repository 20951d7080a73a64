# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""Commit message validation for the commit-msg hook."""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path

from .config_loader import CommitMessageConfig, ConfigurationError, GateConfig, Severity

# Messages generated by git itself are never rewritten by hand
PASSTHROUGH_PREFIXES = ("Merge ", "fixup! ", "squash! ", "amend! ")


def first_message_line(content: str) -> str:
    """Return the subject line, ignoring git comment lines."""
    for line in content.splitlines():
        if line.startswith("#"):
            continue
        if line.strip():
            return line.strip()
    return ""


class CommitMessageValidator:
    """Validates a commit subject line against the configured pattern."""

    def __init__(self, config: CommitMessageConfig):
        self.config = config
        try:
            self.pattern = re.compile(config.pattern) if config.pattern else None
        except re.error as err:
            raise ConfigurationError(f"Invalid commitMessage.pattern {config.pattern!r}: {err}") from err

    def validate(self, content: str) -> tuple[bool, str]:
        subject = first_message_line(content)
        if not subject:
            return False, "Empty commit message."
        if subject.startswith(PASSTHROUGH_PREFIXES):
            return True, f"Generated commit message: {subject}"
        if self.pattern is None or self.pattern.match(subject):
            return True, f"Valid commit message: {subject}"
        return False, self._generate_error_message(subject)

    def _generate_error_message(self, subject: str) -> str:
        lines = [self.config.message or "Invalid commit message", f"Got: {subject}"]
        if self.config.examples:
            lines.append("")
            lines.append("Examples:")
            lines.extend(f"  ✔ {example}" for example in self.config.examples)
        return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate the commit message (commit-msg hook)")
    parser.add_argument("message_file", help="Path to the commit message file (e.g. .git/COMMIT_EDITMSG)")
    parser.add_argument("--config", default=None, help="Path to config file")
    parser.add_argument("-q", "--quiet", action="store_true")

    args = parser.parse_args(argv)

    try:
        config = GateConfig(args.config).commit_message
        validator = CommitMessageValidator(config)
    except ConfigurationError as err:
        print(f"Configuration error: {err}", file=sys.stderr)
        sys.exit(1)

    if not config.enabled:
        sys.exit(0)

    path = Path(args.message_file)
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as err:
        print(f"Commit message file not readable: {path} ({err})", file=sys.stderr)
        sys.exit(1)

    is_valid, message = validator.validate(content)
    if is_valid:
        if not args.quiet:
            print(f"✔ {message}")
        sys.exit(0)

    color = Severity.COLORS[Severity.ERROR] if config.block_commit else Severity.COLORS[Severity.WARNING]
    if sys.stderr.isatty():
        message = f"{color}{message}{Severity.RESET}"
    print(message, file=sys.stderr)
    sys.exit(1 if config.block_commit else 0)


if __name__ == "__main__":
    main()
