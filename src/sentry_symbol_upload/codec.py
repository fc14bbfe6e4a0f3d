"""
Rendering and removal of the marker-delimited upload task.

The gradle script is treated as opaque text: the only structure this
module relies on is the pair of marker comment lines surrounding the block
it writes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .constants import (
    IL2CPP_MAPPING_FLAG,
    INCLUDE_SOURCES_FLAG,
    LOGS_DIR_NAME,
    SENTRY_PROPERTIES_ENV,
    SENTRY_PROPERTIES_FINGERPRINT,
    SENTRY_PROPERTIES_PATH,
    SYMBOL_UPLOAD_TASK_END_COMMENT,
    SYMBOL_UPLOAD_TASK_START_COMMENT,
    SYMBOL_UPLOAD_TASK_TEMPLATE,
    UPLOAD_LOG_FILE_NAME,
)

PathLike = Union[str, Path]


@dataclass
class UploadTaskParameters:
    cli_path: str
    directory_arguments: List[str] = field(default_factory=list)
    log_root_path: str = "."
    include_sources: bool = False

    @property
    def log_file_path(self) -> str:
        return f"{self.log_root_path}/{LOGS_DIR_NAME}/{UPLOAD_LOG_FILE_NAME}"

    def upload_arguments(self) -> str:
        # sentry-cli always receives the IL2CPP mapping flag
        flags = [_quote(IL2CPP_MAPPING_FLAG)]
        if self.include_sources:
            flags.append(_quote(INCLUDE_SOURCES_FLAG))
        return ", ".join(flags + list(self.directory_arguments))


def convert_slashes(path: PathLike) -> str:
    # Gradle doesn't accept backslashes in paths (Windows)
    return str(path).replace("\\", "/")


def build_directory_arguments(directories: Iterable[PathLike]) -> List[str]:
    return [_quote(convert_slashes(directory)) for directory in directories]


def render_block(params: UploadTaskParameters) -> str:
    """Render the upload task wrapped in its marker lines, newline terminated."""
    body = SYMBOL_UPLOAD_TASK_TEMPLATE.format(
        cli_path=_escape_single_quoted(convert_slashes(params.cli_path)),
        upload_arguments=params.upload_arguments(),
        log_path=_escape_single_quoted(convert_slashes(params.log_file_path)),
        env_name=SENTRY_PROPERTIES_ENV,
        properties_path=SENTRY_PROPERTIES_PATH,
    )
    return "\n".join(
        [SYMBOL_UPLOAD_TASK_START_COMMENT, body, SYMBOL_UPLOAD_TASK_END_COMMENT]
    ) + "\n"


def find_block(script_text: str) -> Optional[Tuple[int, int]]:
    """Return the (start, end) offsets of the injected block, or None.

    The span runs from the first start marker to the first end marker after
    it and includes the line terminator following the end marker.
    """
    start = script_text.find(SYMBOL_UPLOAD_TASK_START_COMMENT)
    if start < 0:
        return None
    end = script_text.find(
        SYMBOL_UPLOAD_TASK_END_COMMENT, start + len(SYMBOL_UPLOAD_TASK_START_COMMENT)
    )
    if end < 0:
        return None
    end += len(SYMBOL_UPLOAD_TASK_END_COMMENT)
    if script_text.startswith("\r\n", end):
        end += 2
    elif script_text.startswith("\n", end):
        end += 1
    return start, end


def strip_block(script_text: str) -> str:
    span = find_block(script_text)
    if span is None:
        return script_text
    start, end = span
    return script_text[:start] + script_text[end:]


def already_injected(script_text: str) -> bool:
    return SENTRY_PROPERTIES_FINGERPRINT in script_text


def _quote(value: str) -> str:
    # Groovy double-quoted strings interpolate $
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


def _escape_single_quoted(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")
