import re
from typing import List, NamedTuple, Callable, Dict
from enum import Enum
from dataclasses import dataclass, field


class EditKind(str, Enum):
    SKIP = 'skip'
    INSERT = 'insert'
    DELETE = 'delete'
    REPLACE = 'replace'


class PathStep(NamedTuple):
    row: int
    col: int


class EditAction(NamedTuple):
    kind: EditKind
    source_index: int
    target_index: int

    def __repr__(self) -> str:
        return f"EditAction({self.kind.value!r}, {self.source_index}, {self.target_index})"


EditScript = List[EditAction]
Sink = Callable[[EditKind, int, int], bool]


@dataclass
class DiffResult:
    script: EditScript
    source_length: int
    target_length: int
    distance: object
    counts: Dict[str, int] = field(default_factory=dict)
    similarity_ratio: float = 1.0

    @classmethod
    def from_script(cls, script: EditScript, source_len: int, target_len: int,
                    distance: object) -> 'DiffResult':
        counts = count_operations(script)
        total = source_len + target_len
        sim_ratio = (2.0 * counts['skips'] / total) if total > 0 else 1.0
        return cls(
            script=script,
            source_length=source_len,
            target_length=target_len,
            distance=distance,
            counts=counts,
            similarity_ratio=sim_ratio
        )

    @property
    def identical(self) -> bool:
        return all(action.kind == EditKind.SKIP for action in self.script)


class TokenType(str, Enum):
    LINE = 'line'
    WORD = 'word'
    CHAR = 'char'
    BYTE = 'byte'


def make_skip(source_index: int, target_index: int) -> EditAction:
    return EditAction(EditKind.SKIP, source_index, target_index)


def make_insert(source_index: int, target_index: int) -> EditAction:
    return EditAction(EditKind.INSERT, source_index, target_index)


def make_delete(source_index: int, target_index: int) -> EditAction:
    return EditAction(EditKind.DELETE, source_index, target_index)


def make_replace(source_index: int, target_index: int) -> EditAction:
    return EditAction(EditKind.REPLACE, source_index, target_index)


def count_operations(script: EditScript) -> Dict[str, int]:
    counts = {
        'skips': 0,
        'inserts': 0,
        'deletes': 0,
        'replaces': 0,
        'total': len(script)
    }
    for action in script:
        if action.kind == EditKind.SKIP:
            counts['skips'] += 1
        elif action.kind == EditKind.INSERT:
            counts['inserts'] += 1
        elif action.kind == EditKind.DELETE:
            counts['deletes'] += 1
        elif action.kind == EditKind.REPLACE:
            counts['replaces'] += 1
    return counts


def tokenize_lines(text: str) -> List[str]:
    if not text:
        return []
    return text.split('\n')


def tokenize_words(text: str) -> List[str]:
    if not text:
        return []
    return re.findall(r'\S+|\s+', text)


def tokenize_chars(text: str) -> List[str]:
    return list(text)


def get_tokenizer(token_type: TokenType) -> Callable[[str], List[str]]:
    tokenizers = {
        TokenType.LINE: tokenize_lines,
        TokenType.WORD: tokenize_words,
        TokenType.CHAR: tokenize_chars
    }
    if token_type not in tokenizers:
        raise ValueError(f"No text tokenizer for {token_type.value!r}")
    return tokenizers[token_type]

