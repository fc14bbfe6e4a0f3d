"""
Build toolchain layout and Gradle task constants.

This module contains the literals shared with the Unity Android build
pipeline and the Gradle script that ends up executing the upload.
They form a compatibility contract with Unity's internal build layout:
when a Unity upgrade moves its intermediate output, these paths move too.

Last verified against:
- Unity 2019.4 - 2021.1 (build output cached in Temp/)
- Unity 2021.2+ (build output cached in Library/Bee/)
"""
from __future__ import annotations

# =============================================================================
# BUILD OUTPUT LAYOUT
# =============================================================================
# Relative to the Unity project root.
# Unity 2021.1 and older stage IL2CPP symbols in Temp/StagingArea
RELATIVE_BUILD_OUTPUT_PATH_OLD = "Temp/StagingArea/symbols"
RELATIVE_GRADLE_PATH_OLD = "Temp/gradleOut"
# Unity 2021.2 moved the build cache into Library/Bee
RELATIVE_BUILD_OUTPUT_PATH_NEW = "Library/Bee/artifacts/Android"
RELATIVE_ANDROID_PATH_NEW = "Library/Bee/Android"

# First version that caches build output inside 'Library' instead of 'Temp'
NEW_BUILD_BACKEND_VERSION = "2021.2"

# Symbol files staged by the legacy pipeline
LEGACY_SYMBOL_FILE_PATTERN = "*.so"

# =============================================================================
# GRADLE PROJECT
# =============================================================================
GRADLE_SCRIPT_NAME = "build.gradle"
# Directory inside the exported gradle project receiving copied symbols
EXPORTED_SYMBOLS_DIR_NAME = "symbols"

# =============================================================================
# UPLOAD TASK
# =============================================================================
SYMBOL_UPLOAD_TASK_START_COMMENT = "// Autogenerated Sentry symbol upload task [start]"
SYMBOL_UPLOAD_TASK_END_COMMENT = "// Autogenerated Sentry symbol upload task [end]"

# Present in every rendered task; used to detect an existing injection
SENTRY_PROPERTIES_FINGERPRINT = "sentry.properties"
SENTRY_PROPERTIES_ENV = "SENTRY_PROPERTIES"
SENTRY_PROPERTIES_PATH = "./sentry.properties"

LOGS_DIR_NAME = "Logs"
UPLOAD_LOG_FILE_NAME = "sentry-symbols-upload.log"

IL2CPP_MAPPING_FLAG = "--il2cpp-mapping"
INCLUDE_SOURCES_FLAG = "--include-sources"

# Placeholders: cli_path, upload_arguments, log_path, env_name, properties_path.
# Literal Groovy braces are doubled for str.format.
SYMBOL_UPLOAD_TASK_TEMPLATE = """\
// Credentials and project settings information are stored in the sentry.properties file
gradle.taskGraph.whenReady {{
    gradle.taskGraph.allTasks[-1].doLast {{
        println 'Uploading symbols to Sentry. You can find the full log in ./Logs/sentry-symbols-upload.log (the file content may not be strictly sequential because it\\'s a merge of two streams).'
        def sentryLogFile = new FileOutputStream('{log_path}')
        exec {{
            environment '{env_name}', '{properties_path}'
            executable '{cli_path}'
            args = ['upload-dif', {upload_arguments}]
            standardOutput sentryLogFile
            errorOutput sentryLogFile
        }}
    }}
}}"""
