"""
Resolution of the directories scanned for debug symbols.

Where Unity leaves the symbol files depends on two things: the build
pipeline generation (Unity 2021.2 moved its build cache from ``Temp`` to
``Library/Bee``) and the scripting backend (only IL2CPP produces the extra
native mapping directory).
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, List, Tuple

from .constants import (
    NEW_BUILD_BACKEND_VERSION,
    RELATIVE_ANDROID_PATH_NEW,
    RELATIVE_BUILD_OUTPUT_PATH_NEW,
    RELATIVE_BUILD_OUTPUT_PATH_OLD,
    RELATIVE_GRADLE_PATH_OLD,
)
from .version import is_newer_or_equal_than


class ToolchainGeneration(str, Enum):
    LEGACY = "legacy"
    CURRENT = "current"

    @classmethod
    def from_version(
        cls, unity_version: str, threshold: str = NEW_BUILD_BACKEND_VERSION
    ) -> "ToolchainGeneration":
        if is_newer_or_equal_than(unity_version, threshold):
            return cls.CURRENT
        return cls.LEGACY

    @classmethod
    def from_flag(cls, is_current: bool) -> "ToolchainGeneration":
        return cls.CURRENT if is_current else cls.LEGACY


class ScriptingBackend(str, Enum):
    MONO = "mono"
    IL2CPP = "il2cpp"


# (path only produced by IL2CPP, path always scanned)
GENERATION_PATHS: Dict[ToolchainGeneration, Tuple[str, str]] = {
    ToolchainGeneration.LEGACY: (RELATIVE_BUILD_OUTPUT_PATH_OLD, RELATIVE_GRADLE_PATH_OLD),
    ToolchainGeneration.CURRENT: (RELATIVE_BUILD_OUTPUT_PATH_NEW, RELATIVE_ANDROID_PATH_NEW),
}


def resolve_upload_paths(
    unity_project_path: Path,
    gradle_project_path: Path,
    generation: ToolchainGeneration,
    backend: ScriptingBackend,
    is_exporting: bool = False,
) -> List[Path]:
    """Return the ordered, duplicate-free list of symbol upload roots.

    When exporting, the gradle project is built elsewhere later on, so the
    whole exported tree is the single root.
    """
    if is_exporting:
        return [Path(gradle_project_path)]

    il2cpp_path, common_path = GENERATION_PATHS[ToolchainGeneration(generation)]
    backend = ScriptingBackend(backend)
    relative: List[str] = []
    if backend is ScriptingBackend.IL2CPP:
        relative.append(il2cpp_path)
    relative.append(common_path)

    root = Path(unity_project_path)
    return list(dict.fromkeys(root / rel for rel in relative))


def describe_generation(generation: ToolchainGeneration) -> str:
    if generation is ToolchainGeneration.CURRENT:
        return f"Unity version {NEW_BUILD_BACKEND_VERSION} or newer detected. Root for symbols upload: 'Library'."
    return f"Unity version older than {NEW_BUILD_BACKEND_VERSION} detected. Root for symbols upload: 'Temp'."
