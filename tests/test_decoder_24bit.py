import logging

import numpy as np
import pytest

from bmpplanes import TruncatedData, decode, row_padding


def test_minimal_2x2__header_fields(minimal_24bit):
    image = decode(minimal_24bit)

    assert image.magic == b"BM"
    assert image.file_size == 70
    assert image.pixel_array_offset == 54
    assert image.dib_header_size == 40
    assert image.width == 2
    assert image.height == 2
    assert image.planes_constant == b"\x00\x01"
    assert image.bits_per_pixel == 24
    assert image.compression == 0
    assert image.image_size_raw == 16
    assert dict(image.palette) == {}


def test_minimal_2x2__planes_follow_buffer_order(minimal_24bit):
    image = decode(minimal_24bit)

    assert image.red_plane.tolist() == [[1, 4], [7, 10]]
    assert image.green_plane.tolist() == [[2, 5], [8, 11]]
    assert image.blue_plane.tolist() == [[3, 6], [9, 12]]


def test_planes_share_shape_and_dtype(minimal_24bit):
    image = decode(minimal_24bit)

    for plane in (image.red_plane, image.green_plane, image.blue_plane):
        assert plane.shape == (image.height, image.width)
        assert plane.dtype == np.uint8


def test_color_count_zero_derived_from_depth(minimal_24bit):
    assert decode(minimal_24bit).color_count == 2**24


@pytest.mark.parametrize("width, padding", [(1, 1), (2, 2), (3, 3), (4, 0), (5, 1)])
def test_row_padding_24bit(width, padding):
    assert row_padding(width, 24) == padding


def test_width_three_skips_three_bytes(make_bmp):
    row0 = bytes(range(1, 10)) + b"\xff" * 3
    row1 = bytes(range(11, 20)) + b"\xff" * 3
    image = decode(make_bmp(3, 2, 24, pixels=row0 + row1))

    assert image.red_plane.tolist() == [[1, 4, 7], [11, 14, 17]]
    assert image.blue_plane.tolist() == [[3, 6, 9], [13, 16, 19]]


def test_width_four_has_no_padding(make_bmp):
    pixels = bytes(range(24))
    image = decode(make_bmp(4, 2, 24, pixels=pixels))

    assert image.red_plane.tolist() == [[0, 3, 6, 9], [12, 15, 18, 21]]


def test_pixel_array_offset_is_honoured(make_bmp):
    pixels = bytes([9, 8, 7, 0])
    data = make_bmp(1, 1, 24, pixels=pixels, pixel_offset=64)
    image = decode(data)

    assert image.pixel_array_offset == 64
    assert image.pixel(0, 0).as_tuple() == (9, 8, 7)


def test_last_row_padding_is_optional(make_bmp):
    pixels = bytes([1, 2, 3, 4, 5, 6, 0, 0, 7, 8, 9, 10, 11, 12])
    image = decode(make_bmp(2, 2, 24, pixels=pixels))

    assert image.blue_plane.tolist() == [[3, 6], [9, 12]]


def test_truncated_pixel_array(make_bmp):
    pixels = bytes([1, 2, 3, 4, 5, 6, 0, 0, 7, 8, 9, 10, 11])
    with pytest.raises(TruncatedData) as excinfo:
        decode(make_bmp(2, 2, 24, pixels=pixels))

    assert excinfo.value.region == "pixel array"
    assert excinfo.value.required == 54 + 14
    assert excinfo.value.available == 54 + 13


@pytest.mark.parametrize("width, height", [(0, 0), (3, 0), (0, 5)])
def test_empty_geometry_needs_no_pixels(make_bmp, width, height):
    image = decode(make_bmp(width, height, 24))

    assert image.red_plane.shape == (height, width)
    assert image.green_plane.shape == (height, width)


def test_memoryview_input(minimal_24bit):
    image = decode(memoryview(minimal_24bit))

    assert image.red_plane.tolist() == [[1, 4], [7, 10]]


def test_header_debug_record(caplog, minimal_24bit):
    with caplog.at_level(logging.DEBUG, logger="bmpplanes.codec.decoder"):
        decode(minimal_24bit)

    assert any(record.getMessage().startswith("Parsed BMP header") for record in caplog.records)
