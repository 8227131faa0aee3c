from typing import Any, List, NamedTuple, Optional, Sequence

from edit_matrix.utils import EditKind, EditAction
from formatters.base import BaseFormatter, FormatterConfig, FormatterFactory, render_element


GUTTERS = {
    EditKind.SKIP: ("   ", None),
    EditKind.REPLACE: (" | ", 'yellow'),
    EditKind.DELETE: (" < ", 'red'),
    EditKind.INSERT: (" > ", 'green'),
}


def fit(text: str, width: int, ellipsis: str = "...") -> str:
    if len(text) <= width:
        return text
    if width <= len(ellipsis):
        return text[:width]
    return text[:width - len(ellipsis)] + ellipsis


class ColumnLayout:
    def __init__(self, total_width: int = 130, gutter_width: int = 3, index_width: int = 4):
        self.total_width = total_width
        self.index_width = index_width
        self.content_width = max(1, (total_width - gutter_width - 2 * index_width - 4) // 2)

    def index(self, value: Optional[int]) -> str:
        text = "" if value is None else str(value)
        return text[:self.index_width].rjust(self.index_width)


class SideBySideRow(NamedTuple):
    kind: EditKind
    left_index: Optional[int]
    left: str
    right_index: Optional[int]
    right: str


def side_by_side_rows(script: List[EditAction], source: Sequence[Any],
                      target: Sequence[Any]) -> List[SideBySideRow]:
    rows = []
    for kind, x, y in script:
        left_index, left = (None, "") if kind == EditKind.INSERT else (x, render_element(source[x]))
        right_index, right = (None, "") if kind == EditKind.DELETE else (y, render_element(target[y]))
        rows.append(SideBySideRow(kind, left_index, left, right_index, right))
    return rows


class SideBySideFormatter(BaseFormatter):
    def __init__(self, config: Optional[FormatterConfig] = None):
        super().__init__(config)
        self.layout = ColumnLayout(self.config.width)

    def format_row(self, row: SideBySideRow) -> str:
        width = self.layout.content_width
        left = fit(row.left, width).ljust(width)
        right = fit(row.right, width)
        if self.config.show_indices:
            left = f"{self.layout.index(row.left_index)} {left}"
            right = f"{self.layout.index(row.right_index)} {right}"
        if row.kind in (EditKind.DELETE, EditKind.REPLACE):
            left = self.colors.paint('red', left)
        if row.kind in (EditKind.INSERT, EditKind.REPLACE):
            right = self.colors.paint('green', right)
        marker, color = GUTTERS[row.kind]
        gutter = self.colors.paint(color, marker) if color else marker
        return f"{left}{gutter}{right}".rstrip()

    def _format_impl(self, script, source, target, source_name, target_name, matrix):
        rule = "=" * self.layout.total_width
        label_width = self.layout.content_width + self.layout.index_width + 1
        self._writeln(rule)
        self._writeln(f"{fit(source_name, label_width).ljust(label_width)}   {fit(target_name, label_width)}")
        self._writeln(rule)
        for row in side_by_side_rows(script, source, target):
            self._writeln(self.format_row(row))


class InlineFormatter(BaseFormatter):
    def __init__(self, config: Optional[FormatterConfig] = None, separator: str = ""):
        super().__init__(config)
        self.separator = separator

    def _format_impl(self, script, source, target, source_name, target_name, matrix):
        paint = self.colors.paint
        parts = []
        for kind, x, y in script:
            if kind == EditKind.SKIP:
                parts.append(render_element(source[x]))
                continue
            removed = paint('red', f"[-{render_element(source[x])}-]") if kind != EditKind.INSERT else ""
            added = paint('green', f"{{+{render_element(target[y])}+}}") if kind != EditKind.DELETE else ""
            parts.append(removed + added)
        self._writeln(self.separator.join(parts))


FormatterFactory.register("side-by-side", SideBySideFormatter)
FormatterFactory.register("inline", InlineFormatter)
