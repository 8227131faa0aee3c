import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from edit_matrix.utils import TokenType, get_tokenizer
from .binary_check import ContentSniffer, get_file_encoding

logger = logging.getLogger(__name__)


@dataclass
class InputSequence:
    name: str
    elements: Sequence[Any]
    display: Sequence[str]
    token_type: TokenType

    def __len__(self) -> int:
        return len(self.elements)


def tokenize_text(text: str, token_type: TokenType, ignore_case: bool = False) -> List[str]:
    if ignore_case:
        text = text.lower()
    if token_type == TokenType.BYTE:
        raise ValueError("Byte tokens need raw input, not text")
    if token_type == TokenType.LINE and text.endswith('\n'):
        text = text[:-1]
    return get_tokenizer(token_type)(text)


def from_bytes(name: str, data: bytes) -> InputSequence:
    return InputSequence(name, data, [f"{b:02x}" for b in data], TokenType.BYTE)


def from_string(text: str, token_type: TokenType = TokenType.CHAR, name: Optional[str] = None,
                ignore_case: bool = False) -> InputSequence:
    if token_type == TokenType.BYTE:
        raw = text.encode('utf-8')
        if ignore_case:
            raw = raw.lower()
        return from_bytes(name or repr(text), raw)
    tokens = tokenize_text(text, token_type, ignore_case)
    return InputSequence(name or repr(text), tokens, tokens, token_type)


def read_input(filepath: str, token_type: TokenType = TokenType.LINE,
               encoding: Optional[str] = None, ignore_case: bool = False) -> InputSequence:
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")
    if os.path.isdir(filepath):
        raise ValueError(f"Cannot compare a directory: {filepath}")
    reason = None if token_type == TokenType.BYTE else ContentSniffer().sniff_file(filepath)
    if token_type == TokenType.BYTE or reason:
        if reason:
            logger.info("%s: %s, comparing bytes", filepath, reason)
        with open(filepath, 'rb') as f:
            data = f.read()
        return from_bytes(filepath, data.lower() if ignore_case else data)
    enc = encoding or get_file_encoding(filepath)
    logger.debug("Reading %s as %s", filepath, enc)
    with open(filepath, 'r', encoding=enc, errors='replace') as f:
        content = f.read()
    tokens = tokenize_text(content, token_type, ignore_case)
    return InputSequence(filepath, tokens, tokens, token_type)
