"""
Tests for codec.py - Rendering and removal of the upload task block.
"""

import pytest

from sentry_symbol_upload.codec import (
    UploadTaskParameters,
    already_injected,
    build_directory_arguments,
    convert_slashes,
    find_block,
    render_block,
    strip_block,
)
from sentry_symbol_upload.constants import (
    SYMBOL_UPLOAD_TASK_END_COMMENT,
    SYMBOL_UPLOAD_TASK_START_COMMENT,
)

UNRELATED_SCRIPT = """\
apply plugin: 'com.android.application'

android {
    compileSdkVersion 33
}
"""


def _params(**overrides) -> UploadTaskParameters:
    values = dict(
        cli_path="/tools/sentry-cli",
        directory_arguments=build_directory_arguments(["/game/Temp/StagingArea/symbols", "/game/Temp/gradleOut"]),
        log_root_path="/game",
    )
    values.update(overrides)
    return UploadTaskParameters(**values)


# =============================================================================
# RENDERING
# =============================================================================


class TestConvertSlashes:
    """Tests for convert_slashes function."""

    def test_windows_path(self):
        assert convert_slashes("C:\\Users\\dev\\sentry-cli.exe") == "C:/Users/dev/sentry-cli.exe"

    def test_posix_path_unchanged(self):
        assert convert_slashes("/usr/local/bin/sentry-cli") == "/usr/local/bin/sentry-cli"


class TestBuildDirectoryArguments:
    """Tests for build_directory_arguments function."""

    def test_quotes_each_directory(self):
        assert build_directory_arguments(["/a", "C:\\b"]) == ['"/a"', '"C:/b"']

    def test_empty(self):
        assert build_directory_arguments([]) == []


class TestUploadTaskParameters:
    """Tests for UploadTaskParameters helpers."""

    def test_mapping_flag_first(self):
        assert _params().upload_arguments() == (
            '"--il2cpp-mapping", "/game/Temp/StagingArea/symbols", "/game/Temp/gradleOut"'
        )

    def test_mapping_flag_always_present(self):
        assert _params(directory_arguments=[]).upload_arguments() == '"--il2cpp-mapping"'
        assert not hasattr(_params(), "include_mapping")

    def test_include_sources(self):
        assert _params(include_sources=True).upload_arguments().startswith(
            '"--il2cpp-mapping", "--include-sources", '
        )

    def test_log_file_path(self):
        assert _params().log_file_path == "/game/Logs/sentry-symbols-upload.log"


class TestRenderBlock:
    """Tests for render_block function."""

    def test_wrapped_in_markers(self):
        block = render_block(_params())
        lines = block.splitlines()
        assert lines[0] == SYMBOL_UPLOAD_TASK_START_COMMENT
        assert lines[-1] == SYMBOL_UPLOAD_TASK_END_COMMENT
        assert block.endswith("\n")

    def test_invokes_cli_once(self):
        block = render_block(_params())
        assert block.count("executable '/tools/sentry-cli'") == 1
        assert block.count("exec {") == 1

    def test_upload_arguments(self):
        block = render_block(_params())
        assert (
            "args = ['upload-dif', \"--il2cpp-mapping\", "
            "\"/game/Temp/StagingArea/symbols\", \"/game/Temp/gradleOut\"]"
        ) in block
        assert "--include-sources" not in block

    def test_include_sources_flag(self):
        assert '"--include-sources"' in render_block(_params(include_sources=True))

    def test_log_redirection(self):
        block = render_block(_params())
        assert "new FileOutputStream('/game/Logs/sentry-symbols-upload.log')" in block
        assert "standardOutput sentryLogFile" in block
        assert "errorOutput sentryLogFile" in block

    def test_properties_environment(self):
        assert "environment 'SENTRY_PROPERTIES', './sentry.properties'" in render_block(_params())

    def test_groovy_braces_balanced(self):
        block = render_block(_params())
        assert block.count("{") == block.count("}")
        assert "{{" not in block

    def test_single_quotes_escaped(self):
        block = render_block(
            _params(cli_path="/home/o'brien/sentry-cli", log_root_path="/work/O'Brien Game")
        )
        assert "executable '/home/o\\'brien/sentry-cli'" in block
        assert "new FileOutputStream('/work/O\\'Brien Game/Logs/sentry-symbols-upload.log')" in block

    def test_double_quoted_arguments_escaped(self):
        assert build_directory_arguments(['/a "b"/$c']) == ['"/a \\"b\\"/\\$c"']

    def test_backslashes_converted(self):
        block = render_block(
            _params(cli_path="C:\\sentry\\sentry-cli.exe", log_root_path="C:\\Game")
        )
        assert "executable 'C:/sentry/sentry-cli.exe'" in block
        assert "'C:/Game/Logs/sentry-symbols-upload.log'" in block


# =============================================================================
# DETECTION AND REMOVAL
# =============================================================================


class TestAlreadyInjected:
    """Tests for already_injected function."""

    def test_rendered_block(self):
        assert already_injected(render_block(_params()))

    def test_empty(self):
        assert not already_injected("")

    def test_unrelated_script(self):
        assert not already_injected(UNRELATED_SCRIPT)

    def test_survives_template_edits(self):
        # Only the properties reference matters, not the exact markers
        assert already_injected("environment 'SENTRY_PROPERTIES', './sentry.properties'")


class TestStripBlock:
    """Tests for strip_block and find_block functions."""

    def test_round_trip_on_empty_script(self):
        assert strip_block(render_block(_params())) == ""

    def test_restores_unrelated_content(self):
        script = UNRELATED_SCRIPT + render_block(_params())
        assert strip_block(script) == UNRELATED_SCRIPT

    def test_block_in_the_middle(self):
        tail = "// trailing content\n"
        script = UNRELATED_SCRIPT + render_block(_params()) + tail
        assert strip_block(script) == UNRELATED_SCRIPT + tail

    def test_preserves_crlf_outside_block(self):
        head = "apply plugin: 'x'\r\n\r\n"
        tail = "dependencies {\r\n}\r\n"
        block = render_block(_params()).replace("\n", "\r\n")
        assert strip_block(head + block + tail) == head + tail

    def test_no_block_unchanged(self):
        assert strip_block(UNRELATED_SCRIPT) == UNRELATED_SCRIPT
        assert find_block(UNRELATED_SCRIPT) is None

    def test_start_marker_without_end_unchanged(self):
        script = UNRELATED_SCRIPT + SYMBOL_UPLOAD_TASK_START_COMMENT + "\nfoo {\n}\n"
        assert strip_block(script) == script

    def test_end_marker_before_start_ignored(self):
        script = SYMBOL_UPLOAD_TASK_END_COMMENT + "\n" + UNRELATED_SCRIPT
        assert strip_block(script) == script

    def test_first_block_only(self):
        block = render_block(_params())
        assert strip_block(block + block) == block

    def test_without_trailing_newline(self):
        block = render_block(_params()).rstrip("\n")
        assert strip_block(UNRELATED_SCRIPT + block) == UNRELATED_SCRIPT

    @pytest.mark.parametrize("include_sources", [False, True])
    def test_find_block_span(self, include_sources):
        block = render_block(_params(include_sources=include_sources))
        start, end = find_block(UNRELATED_SCRIPT + block)
        assert start == len(UNRELATED_SCRIPT)
        assert end == len(UNRELATED_SCRIPT) + len(block)
