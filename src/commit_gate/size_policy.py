# -*- coding: utf-8 -*-
# Copyright 2025 Soltein SA. de CV.
# License LGPL-3 or later (http://www.gnu.org/licenses/lgpl.html)

"""Size limits: parsing, formatting and per-file resolution."""

import os
import re
from typing import Dict, Union

from .config_loader import ConfigurationError

SizeSpec = Union[int, float, str]

SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-z]+)?\s*$", re.IGNORECASE)

UNITS = {
    "b": 1,
    "byte": 1,
    "bytes": 1,
    "kb": 1024,
    "kilobyte": 1024,
    "kilobytes": 1024,
    "mb": 1024**2,
    "megabyte": 1024**2,
    "megabytes": 1024**2,
    "gb": 1024**3,
    "gigabyte": 1024**3,
    "gigabytes": 1024**3,
}

DISPLAY_UNITS = ["Bytes", "KB", "MB", "GB"]

CATEGORY_EXTENSIONS = {
    "images": {".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".ico", ".bmp"},
    "videos": {".mp4", ".avi", ".mov", ".wmv", ".flv", ".webm"},
    "documents": {".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx"},
}

DEFAULT_KEY = "default"


class InvalidSizeFormat(ConfigurationError):
    """Size string does not look like <number><unit>."""


class UnknownSizeUnit(ConfigurationError):
    """Size string uses a unit outside the unit table."""


def parse_size(value: SizeSpec) -> Union[int, float]:
    """Convert a size value to bytes.

    Numbers are already bytes and come back unchanged. Strings look like ``500kb`` or ``2 MB``;
    a missing unit means bytes.
    """
    if isinstance(value, bool):
        raise InvalidSizeFormat(f"Invalid size format: {value!r}")
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        raise InvalidSizeFormat(f"Invalid size format: {value!r}")

    match = SIZE_PATTERN.match(value)
    if not match:
        raise InvalidSizeFormat(f"Invalid size format: {value}")

    number = float(match.group(1))
    unit = (match.group(2) or "b").lower()
    if unit not in UNITS:
        raise UnknownSizeUnit(f"Unknown unit: {unit}")
    return int(number * UNITS[unit])


def format_bytes(size: int, decimals: int = 2) -> str:
    """Human-readable size, e.g. ``format_bytes(1536) == "1.5 KB"``."""
    if size <= 0:
        return "0 Bytes"
    decimals = max(decimals, 0)
    index = 0
    while index + 1 < len(DISPLAY_UNITS) and size >= 1024 ** (index + 1):
        index += 1
    value = round(size / 1024**index, decimals)
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {DISPLAY_UNITS[index]}"


def category_for(extension: str):
    """Return the size category an extension belongs to, if any."""
    for category, extensions in CATEGORY_EXTENSIONS.items():
        if extension in extensions:
            return category
    return None


class SizePolicy:
    """Resolves the size limit applicable to a file."""

    def __init__(self, limits: Dict[str, SizeSpec]):
        self.limits = {str(key).lower(): value for key, value in (limits or {}).items()}

    def limit_spec_for(self, file_path: str) -> SizeSpec:
        extension = os.path.splitext(file_path)[1].lower()
        if extension and extension in self.limits:
            return self.limits[extension]

        category = category_for(extension)
        if category and category in self.limits:
            return self.limits[category]

        if DEFAULT_KEY not in self.limits:
            raise ConfigurationError("fileSize.limits has no 'default' entry")
        return self.limits[DEFAULT_KEY]

    def resolve_limit(self, file_path: str) -> int:
        """Maximum size in bytes for ``file_path``.

        Precedence: exact extension, then category, then ``default``.
        """
        return parse_size(self.limit_spec_for(file_path))
