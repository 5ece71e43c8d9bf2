"""Tests for format tags and the corner signature."""

import pytest

from vixyl.codecs import GrayCodec
from vixyl.errors import InvalidHeaderError, UnknownFormatError
from vixyl.formats import FormatTag, get_codec, read_signature, resolve_tag, signature_pixels
from vixyl.pixels import Pixel


class FakeImage:
    """Pixel source holding only the two signature pixels."""

    def __init__(self, vix: Pixel, yl: Pixel):
        self._pixels = {(0, 0): vix, (1, 0): yl}

    def get_pixel(self, x, y):
        return self._pixels[(x, y)]


class TestRegistry:
    def test_gray_codec(self):
        assert isinstance(get_codec(FormatTag.GRAY), GrayCodec)

    def test_raw_int_tag(self):
        assert isinstance(get_codec(0), GrayCodec)

    def test_fresh_instance_per_call(self):
        assert get_codec(0) is not get_codec(0)

    @pytest.mark.parametrize("tag", [1, 7, 255, -1])
    def test_unknown_tag(self, tag):
        with pytest.raises(UnknownFormatError, match="Unknown format tag"):
            get_codec(tag)

    def test_resolve_tag(self):
        assert resolve_tag(0) is FormatTag.GRAY

    def test_tags_fit_in_a_byte(self):
        for tag in FormatTag:
            assert 0 <= tag <= 0xFF


class TestGrayCodec:
    def test_one_pixel_per_byte(self):
        assert GrayCodec().bytes_to_pixels(b"\x00\x7f\xff") == [
            Pixel(0, 0, 0),
            Pixel(127, 127, 127),
            Pixel(255, 255, 255),
        ]

    def test_reads_red_channel(self):
        assert GrayCodec().pixels_to_bytes([Pixel(9, 1, 2), Pixel(200, 0, 0)]) == b"\x09\xc8"

    def test_roundtrip(self):
        data = bytes(range(256))
        codec = GrayCodec()
        assert codec.pixels_to_bytes(codec.bytes_to_pixels(data)) == data


class TestSignature:
    def test_signature_pixels(self):
        assert signature_pixels(FormatTag.GRAY) == (Pixel(86, 105, 120), Pixel(121, 108, 0))

    def test_read_valid_signature(self):
        image = FakeImage(*signature_pixels(FormatTag.GRAY))
        assert read_signature(image) is FormatTag.GRAY

    @pytest.mark.parametrize(
        "vix, yl",
        [
            (Pixel(87, 105, 120), Pixel(121, 108, 0)),
            (Pixel(86, 104, 120), Pixel(121, 108, 0)),
            (Pixel(86, 105, 121), Pixel(121, 108, 0)),
            (Pixel(86, 105, 120), Pixel(120, 108, 0)),
            (Pixel(86, 105, 120), Pixel(121, 109, 0)),
            (Pixel(0, 0, 0), Pixel(0, 0, 0)),
        ],
    )
    def test_altered_magic(self, vix, yl):
        with pytest.raises(InvalidHeaderError, match="not a Vixyl"):
            read_signature(FakeImage(vix, yl))

    def test_unknown_tag_in_signature(self):
        image = FakeImage(Pixel(86, 105, 120), Pixel(121, 108, 42))
        with pytest.raises(UnknownFormatError):
            read_signature(image)
