"""Command line entry points for build hooks."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from . import __version__
from .errors import SymbolUploadError
from .options import UploadOptions, load_options
from .patcher import DebugSymbolUpload
from .paths import ScriptingBackend, ToolchainGeneration

app = typer.Typer(
    add_completion=False,
    help="Maintain the Sentry debug symbol upload task in Unity's exported gradle project.",
)

GRADLE_PROJECT_ARG = typer.Argument(
    ..., help="Exported gradle project directory (contains build.gradle).", file_okay=False
)
UNITY_PROJECT_OPT = typer.Option(
    Path("."), "--unity-project", help="Unity project root.", file_okay=False
)
UNITY_VERSION_OPT = typer.Option(
    ..., "--unity-version", help="Unity editor version, e.g. 2021.3.5f1."
)
BACKEND_OPT = typer.Option(
    ScriptingBackend.IL2CPP, "--backend", help="Scripting backend used by the build."
)
EXPORT_OPT = typer.Option(
    False, "--export", help="The project is exported as a gradle project and built later."
)
OPTIONS_OPT = typer.Option(
    None, "--options", help="JSON file with upload options.", dir_okay=False
)
VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_upload(
    gradle_project: Path,
    unity_project: Path,
    unity_version: str,
    backend: ScriptingBackend,
    export: bool,
    options: UploadOptions,
) -> DebugSymbolUpload:
    return DebugSymbolUpload(
        unity_project_path=unity_project.resolve(),
        gradle_project_path=gradle_project.resolve(),
        scripting_backend=backend,
        generation=ToolchainGeneration.from_version(unity_version),
        options=options,
        is_exporting=export,
    )


def _fail(exc: SymbolUploadError) -> NoReturn:
    typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


@app.command()
def paths(
    gradle_project: Path = GRADLE_PROJECT_ARG,
    unity_project: Path = UNITY_PROJECT_OPT,
    unity_version: str = UNITY_VERSION_OPT,
    backend: ScriptingBackend = BACKEND_OPT,
    export: bool = EXPORT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Print the directories that would be scanned for debug symbols."""
    _configure_logging(verbose)
    try:
        upload = _build_upload(
            gradle_project, unity_project, unity_version, backend, export, UploadOptions()
        )
    except SymbolUploadError as exc:
        _fail(exc)
    for path in upload.symbol_upload_paths:
        typer.echo(str(path))


@app.command()
def inject(
    gradle_project: Path = GRADLE_PROJECT_ARG,
    cli_path: Path = typer.Option(..., "--cli-path", help="Path to the sentry-cli executable."),
    unity_project: Path = UNITY_PROJECT_OPT,
    unity_version: str = UNITY_VERSION_OPT,
    backend: ScriptingBackend = BACKEND_OPT,
    export: bool = EXPORT_OPT,
    options: Optional[Path] = OPTIONS_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Append the symbol upload task to build.gradle."""
    _configure_logging(verbose)
    try:
        upload_options = load_options(options)
        upload = _build_upload(
            gradle_project, unity_project, unity_version, backend, export, upload_options
        )
        if not upload_options.upload_symbols:
            logging.getLogger(__name__).info(
                "Symbol upload is disabled. Removing any previous upload task."
            )
            changed = upload.remove_upload_from_gradle_file()
            typer.echo("removed" if changed else "unchanged")
            return
        changed = upload.append_upload_to_gradle_file(cli_path)
    except SymbolUploadError as exc:
        _fail(exc)
    typer.echo("injected" if changed else "unchanged")


@app.command()
def remove(
    gradle_project: Path = GRADLE_PROJECT_ARG,
    unity_project: Path = UNITY_PROJECT_OPT,
    unity_version: str = UNITY_VERSION_OPT,
    backend: ScriptingBackend = BACKEND_OPT,
    export: bool = EXPORT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Remove a previously appended symbol upload task from build.gradle."""
    _configure_logging(verbose)
    try:
        upload = _build_upload(
            gradle_project, unity_project, unity_version, backend, export, UploadOptions()
        )
        changed = upload.remove_upload_from_gradle_file()
    except SymbolUploadError as exc:
        _fail(exc)
    typer.echo("removed" if changed else "unchanged")


@app.command("copy-symbols")
def copy_symbols(
    gradle_project: Path = GRADLE_PROJECT_ARG,
    unity_project: Path = UNITY_PROJECT_OPT,
    unity_version: str = UNITY_VERSION_OPT,
    backend: ScriptingBackend = BACKEND_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Copy legacy (pre-2021.2) symbol files into the exported gradle project."""
    _configure_logging(verbose)
    try:
        upload = _build_upload(
            gradle_project, unity_project, unity_version, backend, True, UploadOptions()
        )
        copied = upload.try_copy_symbols_to_gradle_project()
    except SymbolUploadError as exc:
        _fail(exc)
    typer.echo(f"copied {len(copied)} file(s)")


@app.command()
def version() -> None:
    """Print the tool version."""
    typer.echo(__version__)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
