from formatters.base import (
    BaseFormatter, SimpleFormatter, MatrixFormatter, FormatterConfig, FormatterFactory,
    ColorScheme, render_element
)
from formatters.side_by_side import (
    SideBySideFormatter, SideBySideRow, ColumnLayout, InlineFormatter, side_by_side_rows, fit
)
from formatters.html import HTMLFormatter, JSONFormatter


__all__ = [
    "BaseFormatter", "SimpleFormatter", "MatrixFormatter", "FormatterConfig", "FormatterFactory",
    "ColorScheme", "render_element",
    "SideBySideFormatter", "SideBySideRow", "ColumnLayout", "InlineFormatter", "side_by_side_rows", "fit",
    "HTMLFormatter", "JSONFormatter"
]


def create_formatter(name: str, config: FormatterConfig = None) -> BaseFormatter:
    return FormatterFactory.create(name, config)


def get_available_formatters():
    return FormatterFactory.available()


def format_diff(
    script,
    source,
    target,
    source_name: str = "source",
    target_name: str = "target",
    formatter_name: str = "simple",
    config: FormatterConfig = None,
    matrix=None
) -> str:
    formatter = create_formatter(formatter_name, config)
    return formatter.format(script, source, target, source_name, target_name, matrix=matrix)
