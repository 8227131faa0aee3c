import os
from typing import BinaryIO, Optional


MAGIC_NUMBERS = {
    b'\x89PNG\r\n\x1a\n': 'png',
    b'\xff\xd8\xff': 'jpeg',
    b'GIF8': 'gif',
    b'PK\x03\x04': 'zip',
    b'%PDF': 'pdf',
    b'\x7fELF': 'elf',
    b'\x1f\x8b': 'gzip',
    b'\xfd7zXZ\x00': 'xz',
}

BYTE_EXTENSIONS = frozenset({
    '.png', '.jpg', '.jpeg', '.gif', '.pdf', '.zip', '.gz', '.xz',
    '.exe', '.dll', '.so', '.bin', '.pyc', '.o',
})

TEXT_BYTES = frozenset({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)))

SAMPLE_SIZE = 8192
NON_TEXT_THRESHOLD = 0.30

BOMS = (
    (b'\xff\xfe\x00\x00', 'utf-32-le'),
    (b'\x00\x00\xfe\xff', 'utf-32-be'),
    (b'\xef\xbb\xbf', 'utf-8-sig'),
    (b'\xff\xfe', 'utf-16-le'),
    (b'\xfe\xff', 'utf-16-be'),
)

FALLBACK_ENCODINGS = ('utf-8', 'cp1252', 'latin-1')


class ContentSniffer:
    def __init__(self, sample_size: int = SAMPLE_SIZE, threshold: float = NON_TEXT_THRESHOLD):
        self.sample_size = sample_size
        self.threshold = threshold

    def sniff(self, data: bytes) -> Optional[str]:
        """Return why ``data`` should be compared as bytes, or None for text."""
        if not data:
            return None
        for magic, kind in MAGIC_NUMBERS.items():
            if data.startswith(magic):
                return f"{kind} signature"
        if detect_bom(data):
            return None
        if b'\x00' in data:
            return "NUL byte"
        try:
            data.decode('utf-8')
            return None
        except UnicodeDecodeError as e:
            if _cut_short(e, data):
                return None
        non_text = sum(1 for byte in data if byte not in TEXT_BYTES)
        if non_text / len(data) > self.threshold:
            return "mostly non-text bytes"
        return None

    def sniff_stream(self, stream: BinaryIO) -> Optional[str]:
        return self.sniff(stream.read(self.sample_size))

    def sniff_file(self, filepath: str) -> Optional[str]:
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"File not found: {filepath}")
        if not os.path.isfile(filepath):
            raise ValueError(f"Not a file: {filepath}")
        ext = os.path.splitext(filepath)[1].lower()
        if ext in BYTE_EXTENSIONS and os.path.getsize(filepath):
            return f"{ext} extension"
        with open(filepath, 'rb') as f:
            return self.sniff_stream(f)


def _cut_short(error: UnicodeDecodeError, data: bytes) -> bool:
    # a multi-byte sequence cut off by the sample boundary is still text
    return error.reason == 'unexpected end of data' and error.start >= len(data) - 3


def is_binary_file(filepath: str) -> bool:
    return ContentSniffer().sniff_file(filepath) is not None


def detect_bom(data: bytes) -> Optional[str]:
    for bom, encoding in BOMS:
        if data.startswith(bom):
            return encoding
    return None


def detect_encoding(data: bytes) -> str:
    encoding = detect_bom(data)
    if encoding:
        return encoding
    for candidate in FALLBACK_ENCODINGS:
        try:
            data.decode(candidate)
            return candidate
        except UnicodeDecodeError as e:
            if candidate == 'utf-8' and _cut_short(e, data):
                return candidate
    return 'latin-1'


def get_file_encoding(filepath: str) -> str:
    with open(filepath, 'rb') as f:
        return detect_encoding(f.read(SAMPLE_SIZE))
