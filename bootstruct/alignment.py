'''
Page alignment arithmetic.

Every component inside a boot image starts on a page boundary, so the
writer needs to know how many filler bytes separate the end of a component
from the next boundary. The page size is always a power of two, this
allows to compute the padding by masking.
'''
from .exceptions import InvalidArgumentException


UINT32_MAX = (1 << 32) - 1
UINT64_MAX = (1 << 64) - 1


def _check(position: int, page_size: int, limit: int) -> None:
    if page_size == 0:
        raise InvalidArgumentException('page size cannot be zero')
    if page_size < 0 or page_size & (page_size - 1):
        raise InvalidArgumentException(f'page size {page_size} is not a power of two')
    if position < 0:
        raise InvalidArgumentException(f'position {position} is negative')
    if position > limit or page_size > limit:
        raise InvalidArgumentException(f'operands ({position}, {page_size}) exceed 0x{limit:x}')


def _padding(position: int, page_size: int) -> int:
    mask = page_size - 1
    return (page_size - (position & mask)) & mask


def padding_size(position: int, page_size: int) -> int:
    '''Return the number of bytes to add to position to reach a multiple of page_size.'''
    _check(position, page_size, max(position, page_size))

    return _padding(position, page_size)


def padding_size_32(position: int, page_size: int) -> int:
    _check(position, page_size, UINT32_MAX)

    return _padding(position, page_size) & UINT32_MAX


def padding_size_64(position: int, page_size: int) -> int:
    _check(position, page_size, UINT64_MAX)

    return _padding(position, page_size) & UINT64_MAX


def align(position: int, page_size: int) -> int:
    '''First page boundary at or after position.'''
    return position + padding_size(position, page_size)


def get_number_of_pages(image_size: int, page_size: int) -> int:
    """calculates the number of pages required for the image"""
    return align(image_size, page_size) // page_size
