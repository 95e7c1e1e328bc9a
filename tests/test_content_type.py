"""Tests for magic-byte content type detection."""

import pytest

from blossom_store.storage import (
    DEFAULT_CONTENT_TYPE,
    SNIFF_LENGTH,
    detect_content_type,
    sniff_content_type,
)


def padded(prefix: bytes, total: int = SNIFF_LENGTH) -> bytes:
    return prefix + bytes(total - len(prefix))


class TestDetectContentType:
    """Tests for detect_content_type."""

    @pytest.mark.parametrize(
        "prefix,expected",
        [
            (b"\x89PNG\r\n\x1a\n", "image/png"),
            (b"\xff\xd8\xff\xe0", "image/jpeg"),
            (b"GIF89a", "image/gif"),
            (b"RIFF\x24\x00\x00\x00WEBPVP8 ", "image/webp"),
            (b"\x00\x00\x00\x18ftypmp42", "video/mp4"),
            (b"\x1a\x45\xdf\xa3", "video/webm"),
            (b"%PDF-1.7", "application/pdf"),
        ],
    )
    def test_known_signatures(self, prefix, expected):
        """Test each signature maps to its MIME type."""
        assert detect_content_type(padded(prefix)) == expected

    def test_zero_bytes_are_octet_stream(self):
        """Test 600 zero bytes have no recognizable signature."""
        assert detect_content_type(bytes(600)) == DEFAULT_CONTENT_TYPE

    def test_short_input_always_falls_back(self):
        """Test payloads under 512 bytes are never sniffed, even with a signature."""
        assert detect_content_type(b"\x89PNG\r\n\x1a\n") == DEFAULT_CONTENT_TYPE
        assert detect_content_type(padded(b"%PDF-1.7", SNIFF_LENGTH - 1)) == DEFAULT_CONTENT_TYPE

    def test_empty_input(self):
        """Test empty payload falls back."""
        assert detect_content_type(b"") == DEFAULT_CONTENT_TYPE

    def test_trailing_content_is_ignored(self):
        """Test only the leading bytes matter."""
        data = b"\x89PNG\r\n\x1a\n" + b"%PDF" * 5000
        assert detect_content_type(data) == "image/png"

    def test_exactly_sniff_length(self):
        """Test a payload of exactly 512 bytes is sniffed."""
        assert detect_content_type(padded(b"GIF87a")) == "image/gif"

    def test_riff_without_webp_is_not_webp(self):
        """Test RIFF containers other than WEBP fall back."""
        assert detect_content_type(padded(b"RIFF\x24\x00\x00\x00WAVEfmt ")) == DEFAULT_CONTENT_TYPE

    def test_accepts_bytearray(self):
        """Test mutable buffers are classified too."""
        assert detect_content_type(bytearray(padded(b"%PDF"))) == "application/pdf"


class TestSniffContentType:
    """Tests for sniff_content_type on raw headers."""

    def test_header_without_minimum_length(self):
        """Test headers are matched without the 512-byte minimum."""
        assert sniff_content_type(b"%PDF-1.4\n") == "application/pdf"

    def test_tiny_header_falls_back(self):
        """Test headers under 8 bytes never match."""
        assert sniff_content_type(b"\x89PNG") == DEFAULT_CONTENT_TYPE
