"""Unity version parsing."""
from __future__ import annotations

import re
from typing import Tuple

from .errors import InvalidVersion

# 2021.2.0f1, 2020.3.15f2, 6000.0.1f1, 2021.2
UNITY_VERSION_PATTERN = re.compile(r"^\s*(\d+)\.(\d+)(?:\.(\d+))?(?:([abfpx])(\d+))?")


def parse_unity_version(version: str) -> Tuple[int, int, int]:
    match = UNITY_VERSION_PATTERN.match(version or "")
    if not match:
        raise InvalidVersion(f"Unrecognized Unity version: {version!r}")
    major, minor, patch = match.group(1), match.group(2), match.group(3)
    return int(major), int(minor), int(patch or 0)


def is_newer_or_equal_than(version: str, threshold: str) -> bool:
    """Compare on year.minor.patch; release suffixes (f1, b3) are ignored."""
    return parse_unity_version(version) >= parse_unity_version(threshold)
