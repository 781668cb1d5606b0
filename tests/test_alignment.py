import pytest

from bootstruct.alignment import (
    align,
    get_number_of_pages,
    padding_size,
    padding_size_32,
    padding_size_64,
)
from bootstruct.exceptions import InvalidArgumentException


def test_padding_size():
    assert padding_size(0, 2048) == 0
    assert padding_size(1, 2048) == 2047
    assert padding_size(2047, 2048) == 1
    assert padding_size(2048, 2048) == 0
    assert padding_size(1632, 4096) == 4096 - 1632


@pytest.mark.parametrize('page_size', [1 << _ for _ in range(0, 21)])
def test_padding_size_reaches_boundary(page_size):
    for position in (0, 1, 7, 100, 2047, 2048, 4095, 4097, 65537, (1 << 20) + 3, (1 << 33) + 11):
        pad = padding_size(position, page_size)

        assert pad < page_size
        assert (position + pad) % page_size == 0


def test_padding_size_widths_agree():
    for position in (0, 1, 2049, 0xfffff001, 0xffffffff):
        for page_size in (2048, 4096, 16384):
            assert padding_size_32(position, page_size) == padding_size_64(position, page_size)
            assert padding_size_32(position, page_size) == padding_size(position, page_size)


def test_padding_size_width_limits():
    assert padding_size_64(1 << 40, 4096) == 0

    with pytest.raises(InvalidArgumentException):
        padding_size_32(1 << 32, 4096)


@pytest.mark.parametrize('function', [padding_size, padding_size_32, padding_size_64])
def test_padding_size_invalid_page_size(function):
    with pytest.raises(InvalidArgumentException):
        function(10, 0)

    with pytest.raises(InvalidArgumentException):
        function(10, 3000)

    with pytest.raises(InvalidArgumentException):
        function(-1, 4096)


def test_align_and_pages():
    assert align(0, 4096) == 0
    assert align(1, 4096) == 4096
    assert align(4097, 4096) == 8192

    assert get_number_of_pages(0, 2048) == 0
    assert get_number_of_pages(1, 2048) == 1
    assert get_number_of_pages(2048, 2048) == 1
    assert get_number_of_pages(2049, 2048) == 2
