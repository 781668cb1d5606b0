'''
Configuration taken from the environment.

The external tools are looked up by name in $PATH unless overridden, e.g.

    $ BOOTSTRUCT_DTC=/opt/dtc/bin/dtc unpackslice.py dtb boot.img ...
'''
import os

from .exceptions import InvalidArgumentException


CPIO_BIN = os.environ.get('BOOTSTRUCT_CPIO', 'cpio')
DTC_BIN = os.environ.get('BOOTSTRUCT_DTC', 'dtc')
MKBOOTFS_BIN = os.environ.get('BOOTSTRUCT_MKBOOTFS', 'mkbootfs')
KERNEL_EXTRACTOR_BIN = os.environ.get('BOOTSTRUCT_KERNEL_EXTRACTOR', 'extract_kernel.py')


def check_chunk_size(value) -> int:
    try:
        chunk_size = int(value)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentException(f'chunk size \'{value}\' is not an integer') from e

    if chunk_size <= 0:
        raise InvalidArgumentException(f'chunk size must be positive, not {chunk_size}')

    return chunk_size


# size of the reads while streaming files, it doesn't change any result
READ_CHUNK_SIZE = check_chunk_size(os.environ.get('BOOTSTRUCT_CHUNK_SIZE', 1024))
