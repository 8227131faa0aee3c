import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, TextIO

from edit_matrix.utils import EditKind, EditAction


ANSI = {
    'reset': '\033[0m',
    'bold': '\033[1m',
    'red': '\033[31m',
    'green': '\033[32m',
    'yellow': '\033[33m',
    'cyan': '\033[36m',
}


@dataclass
class FormatterConfig:
    width: int = 130
    use_color: bool = True
    show_indices: bool = True
    cell_width: int = 4

    def with_width(self, width: int) -> 'FormatterConfig':
        return replace(self, width=width)

    def with_color(self, use_color: bool) -> 'FormatterConfig':
        return replace(self, use_color=use_color)


class ColorScheme:
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        for name, code in ANSI.items():
            setattr(self, name, code if enabled else '')

    def paint(self, color: str, text: str) -> str:
        if not self.enabled:
            return text
        return f"{getattr(self, color)}{text}{self.reset}"


def render_element(element: Any) -> str:
    if isinstance(element, str):
        return element
    return repr(element)


class BaseFormatter(ABC):
    def __init__(self, config: Optional[FormatterConfig] = None):
        self.config = config or FormatterConfig()
        self.colors = ColorScheme(self.config.use_color)
        self._out: Optional[TextIO] = None

    def format(
        self,
        script: List[EditAction],
        source: Sequence[Any],
        target: Sequence[Any],
        source_name: str = "source",
        target_name: str = "target",
        matrix: Optional[Sequence[Any]] = None,
        output: Optional[TextIO] = None
    ) -> str:
        buffer = io.StringIO() if output is None else None
        self._out = output or buffer
        try:
            self._format_impl(script, source, target, source_name, target_name, matrix)
        finally:
            self._out = None
        return buffer.getvalue() if buffer is not None else ""

    @abstractmethod
    def _format_impl(
        self,
        script: List[EditAction],
        source: Sequence[Any],
        target: Sequence[Any],
        source_name: str,
        target_name: str,
        matrix: Optional[Sequence[Any]]
    ):
        pass

    def has_changes(self, script: List[EditAction]) -> bool:
        return any(action.kind != EditKind.SKIP for action in script)

    def _write(self, text: str):
        self._out.write(text)

    def _writeln(self, text: str = ""):
        self._out.write(text + "\n")


class SimpleFormatter(BaseFormatter):
    def _format_impl(self, script, source, target, source_name, target_name, matrix):
        paint = self.colors.paint
        for kind, x, y in script:
            if kind == EditKind.SKIP:
                self._writeln(f" {render_element(source[x])}")
            elif kind == EditKind.DELETE:
                self._writeln(paint('red', f"-{render_element(source[x])}"))
            elif kind == EditKind.INSERT:
                self._writeln(paint('green', f"+{render_element(target[y])}"))
            elif kind == EditKind.REPLACE:
                self._writeln(paint('yellow', f"~{render_element(source[x])} -> {render_element(target[y])}"))


def _path_cells(script: List[EditAction]) -> set:
    cells = {(0, 0)}
    for kind, x, y in script:
        if kind == EditKind.INSERT:
            cells.add((x, y + 1))
        elif kind == EditKind.DELETE:
            cells.add((x + 1, y))
        else:
            cells.add((x + 1, y + 1))
    return cells


def _format_cost(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class MatrixFormatter(BaseFormatter):
    def _format_impl(self, script, source, target, source_name, target_name, matrix):
        if matrix is None:
            raise ValueError("MatrixFormatter needs the distance matrix")
        w = self.config.cell_width
        width = len(target) + 1
        on_path = _path_cells(script)
        header = " " * (2 * w) + "".join(render_element(e)[:w - 1].rjust(w) for e in target)
        self._writeln(self.colors.paint('bold', header))
        for i in range(len(source) + 1):
            label = render_element(source[i - 1])[:w - 1] if i else ""
            cells = []
            for j in range(width):
                text = _format_cost(matrix[width * i + j]).rjust(w)
                cells.append(self.colors.paint('cyan', text) if (i, j) in on_path else text)
            self._writeln(label.rjust(w) + "".join(cells))


class FormatterFactory:
    _formatters: Dict[str, type] = {}

    @classmethod
    def register(cls, name: str, formatter_class: type):
        cls._formatters[name] = formatter_class

    @classmethod
    def create(cls, name: str, config: Optional[FormatterConfig] = None) -> BaseFormatter:
        if name not in cls._formatters:
            raise ValueError(f"Unknown formatter: {name}")
        return cls._formatters[name](config)

    @classmethod
    def available(cls) -> List[str]:
        return list(cls._formatters)


FormatterFactory.register("simple", SimpleFormatter)
FormatterFactory.register("matrix", MatrixFormatter)
