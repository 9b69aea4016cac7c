"""Exception hierarchy for fmtspec.

All custom exceptions inherit from FmtSpecError, making it easy to catch
all fmtspec-specific errors in a single except clause.

Assertion failures (cross-parser divergence, re-parse failures, structural
mismatches) are plain AssertionErrors scoped to a single test unit and are
not part of this hierarchy.
"""


class FmtSpecError(Exception):
    """Base exception for all fmtspec errors.

    Example:
        try:
            run_spec(directory, parsers=[], formatter=formatter)
        except FmtSpecError as e:
            print(f"fmtspec error: {e}")
    """

    pass


class ConfigError(FmtSpecError):
    """Configuration-related errors.

    Raised when:
    - A spec definition lists no parsers
    - Config files are missing or cannot be read
    - YAML syntax is invalid or fields fail validation
    - A formatter tool name is not registered
    - An option set reaches the formatter without a parser or interpreter

    Examples:
        - "No parsers were specified for tests/python/comments"
        - "Spec definition not found at tests/python/comments/format_spec.yaml"
        - "Unknown formatter tool 'prettier'. Available tools: command"
    """

    pass


class FormatterError(FmtSpecError):
    """Errors reported by a bundled formatter bridge.

    Raised when:
    - The formatter command cannot be spawned
    - The formatter exits with a non-zero status
    - The formatter replies with an error payload or invalid JSON

    Note: Errors raised by third-party formatters are propagated as-is and
    fail only the test unit that triggered them.
    """

    pass
