from .binary_check import ContentSniffer, is_binary_file, detect_bom, detect_encoding, get_file_encoding
from .reader import InputSequence, read_input, from_string, from_bytes, tokenize_text


__all__ = [
    "ContentSniffer", "is_binary_file", "detect_bom", "detect_encoding", "get_file_encoding",
    "InputSequence", "read_input", "from_string", "from_bytes", "tokenize_text",
]
