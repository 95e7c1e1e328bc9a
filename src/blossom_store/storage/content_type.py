"""Magic-byte content type detection

Blobs are classified from their leading bytes only; client-supplied
Content-Type headers are never trusted.
"""

from typing import Callable, Sequence, Tuple

SNIFF_LENGTH = 512
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Shortest header the signature table is evaluated against
_MIN_HEADER = 8

_Matcher = Callable[[bytes], bool]

# Ordered; first match wins
SIGNATURES: Sequence[Tuple[str, _Matcher]] = (
    ("image/png", lambda h: h[:4] == b"\x89PNG"),
    ("image/jpeg", lambda h: h[:3] == b"\xff\xd8\xff"),
    ("image/gif", lambda h: h[:3] == b"GIF"),
    ("image/webp", lambda h: h[:4] == b"RIFF" and h[8:12] == b"WEBP"),
    ("video/mp4", lambda h: h[4:8] == b"ftyp"),
    ("video/webm", lambda h: h[:4] == b"\x1a\x45\xdf\xa3"),
    ("application/pdf", lambda h: h[:4] == b"%PDF"),
)


def sniff_content_type(header: bytes) -> str:
    """Match a header against the signature table.

    Args:
        header: Leading bytes of a blob

    Returns:
        MIME type of the first matching signature, or DEFAULT_CONTENT_TYPE
    """
    if len(header) < _MIN_HEADER:
        return DEFAULT_CONTENT_TYPE
    for content_type, matches in SIGNATURES:
        if matches(header):
            return content_type
    return DEFAULT_CONTENT_TYPE


def detect_content_type(data: bytes) -> str:
    """Classify a blob's content type from its first SNIFF_LENGTH bytes.

    Payloads shorter than SNIFF_LENGTH are always DEFAULT_CONTENT_TYPE.
    Never raises.
    """
    if len(data) < SNIFF_LENGTH:
        return DEFAULT_CONTENT_TYPE
    return sniff_content_type(bytes(data[:SNIFF_LENGTH]))
