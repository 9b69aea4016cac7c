"""Cross-parser verification.

Parsers for the same language must be formatting-equivalent: formatting a
fixture with an alternate parser has to reproduce the primary parser's
output byte for byte.
"""

from ..core.models import Fixture, OptionSet
from ..formatters.abc import Formatter
from .diff import text_diff
from .invoke import format_source


def verify_cross_parser(
    formatter: Formatter,
    fixture: Fixture,
    reference_output: str,
    options: OptionSet,
    parser: str,
) -> None:
    """Assert that ``parser`` formats ``fixture`` exactly like the reference.

    Args:
        formatter: Formatter under test
        fixture: Fixture being formatted
        reference_output: Output of the primary parser
        options: Option set that produced ``reference_output``
        parser: Alternate parser to check

    Raises:
        AssertionError: If the outputs differ
    """
    verify_options = options.model_copy(update={"parser": parser})
    output = format_source(formatter, fixture.source, fixture.path, verify_options)

    if output != reference_output:
        raise AssertionError(
            f"{fixture.name}: parser '{parser}' output differs from "
            f"'{options.parser}'\n"
            + text_diff(reference_output, output, options.parser or "reference", parser)
        )
