"""Errors raised while patching the exported Gradle project."""
from __future__ import annotations

from pathlib import Path
from typing import Union


class SymbolUploadError(Exception):
    """Base class for every error raised by this package."""


class _MissingPathError(SymbolUploadError, FileNotFoundError):
    message = "Failed to find path"

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"{self.message} at {path}")


class ScriptNotFound(_MissingPathError):
    message = "Failed to find the gradle config"


class ExecutableNotFound(_MissingPathError):
    message = "Failed to find sentry-cli"


class SymbolDirectoryNotFound(_MissingPathError):
    message = "Failed to find the symbols directory"


class InvalidOptions(SymbolUploadError, ValueError):
    pass


class InvalidVersion(SymbolUploadError, ValueError):
    pass
