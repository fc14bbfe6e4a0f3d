"""
Maintenance of the symbol upload task inside an exported gradle project.

``DebugSymbolUpload`` owns exactly one region of ``build.gradle``: the block
between the two marker comments. Everything else in the script belongs to
Unity's exporter and is written back byte for byte.
"""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Union

from .codec import (
    UploadTaskParameters,
    already_injected,
    build_directory_arguments,
    convert_slashes,
    render_block,
    strip_block,
)
from .constants import (
    EXPORTED_SYMBOLS_DIR_NAME,
    GRADLE_SCRIPT_NAME,
    LEGACY_SYMBOL_FILE_PATTERN,
    RELATIVE_BUILD_OUTPUT_PATH_OLD,
)
from .errors import ExecutableNotFound, ScriptNotFound, SymbolDirectoryNotFound
from .options import UploadOptions
from .paths import (
    ScriptingBackend,
    ToolchainGeneration,
    describe_generation,
    resolve_upload_paths,
)

logger = logging.getLogger(__name__)


class DebugSymbolUpload:
    def __init__(
        self,
        unity_project_path: Union[str, Path],
        gradle_project_path: Union[str, Path],
        scripting_backend: ScriptingBackend,
        generation: ToolchainGeneration,
        options: Optional[UploadOptions] = None,
        is_exporting: bool = False,
    ) -> None:
        self.unity_project_path = Path(unity_project_path)
        self.gradle_project_path = Path(gradle_project_path)
        self.gradle_script_path = self.gradle_project_path / GRADLE_SCRIPT_NAME
        self.scripting_backend = ScriptingBackend(scripting_backend)
        self.generation = ToolchainGeneration(generation)
        self.options = options or UploadOptions()
        self.is_exporting = is_exporting
        self.symbol_upload_paths = self._get_symbol_upload_paths()

    def append_upload_to_gradle_file(self, cli_path: Union[str, Path]) -> bool:
        """Append the upload task unless a previous build already did.

        Every precondition is checked before the script is touched, so a
        failure leaves ``build.gradle`` unmodified. Returns True when the
        script was changed.
        """
        if already_injected(self._load_gradle_script()):
            logger.debug("Symbol upload has already been added in a previous build.")
            return False

        logger.info("Appending debug symbols upload task to gradle file.")

        cli_path = convert_slashes(cli_path)
        if not Path(cli_path).is_file():
            raise ExecutableNotFound(cli_path)

        for symbol_upload_path in self.symbol_upload_paths:
            if not symbol_upload_path.is_dir():
                raise SymbolDirectoryNotFound(symbol_upload_path)

        params = UploadTaskParameters(
            cli_path=cli_path,
            directory_arguments=build_directory_arguments(self.symbol_upload_paths),
            log_root_path=convert_slashes(self.unity_project_path),
            include_sources=self.options.upload_sources,
        )
        with self.gradle_script_path.open("a", encoding="utf-8", errors="surrogateescape", newline="") as fp:
            fp.write(render_block(params))
        return True

    def remove_upload_from_gradle_file(self) -> bool:
        logger.debug("Removing the upload task from the gradle project.")
        script = self._load_gradle_script()
        if not already_injected(script):
            logger.debug("No previous upload task found.")
            return False

        stripped = strip_block(script)
        if stripped == script:
            logger.debug("Upload task markers not found. Leaving %s untouched.", self.gradle_script_path)
            return False
        with self.gradle_script_path.open("w", encoding="utf-8", errors="surrogateescape", newline="") as fp:
            fp.write(stripped)
        return True

    def try_copy_symbols_to_gradle_project(self) -> List[Path]:
        # The new building backend makes the symbols available within the exported project
        if self.generation is ToolchainGeneration.CURRENT:
            logger.debug("New building backend. Skipping copying of debug symbols.")
            return []

        logger.info("Copying debug symbols to exported gradle project.")

        build_output_path = self.unity_project_path / RELATIVE_BUILD_OUTPUT_PATH_OLD
        target_root = self.gradle_project_path / EXPORTED_SYMBOLS_DIR_NAME
        if not build_output_path.is_dir():
            raise SymbolDirectoryNotFound(build_output_path)

        copied: List[Path] = []
        for source_path in sorted(build_output_path.rglob(LEGACY_SYMBOL_FILE_PATTERN)):
            if not source_path.is_file():
                continue
            target_path = target_root / source_path.relative_to(build_output_path)
            logger.debug("Copying '%s' to '%s'", source_path, target_path)
            target_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_path, target_path)
            copied.append(target_path)
        return copied

    def _get_symbol_upload_paths(self) -> List[Path]:
        if self.is_exporting:
            logger.info("Exporting the project. Root for symbols upload: %s", self.gradle_project_path)
        else:
            logger.info(describe_generation(self.generation))
        return resolve_upload_paths(
            self.unity_project_path,
            self.gradle_project_path,
            self.generation,
            self.scripting_backend,
            self.is_exporting,
        )

    def _load_gradle_script(self) -> str:
        if not self.gradle_script_path.is_file():
            raise ScriptNotFound(self.gradle_script_path)
        with self.gradle_script_path.open("r", encoding="utf-8", errors="surrogateescape", newline="") as fp:
            return fp.read()
