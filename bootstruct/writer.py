'''
Placement of the components inside the image under construction.

    +-----------------+
    | boot header     | 1 page
    +-----------------+
    | kernel          | n pages
    +-----------------+
    | ramdisk         | m pages
    +-----------------+
    | second stage    | o pages
    +-----------------+

every entity starts at a page boundary, so after each component the
buffer is padded with zeros.
'''
import logging
import os

from . import settings
from .alignment import padding_size
from .exceptions import IOException
from .streams import OutputBuffer, Stream


logger = logging.getLogger(__name__)


def pad_buffer(buffer: OutputBuffer, padding: int) -> int:
    '''Append zeros to buffer up to the next multiple of padding, returns how many.'''
    pad = padding_size(buffer.position, padding)
    buffer.write(b'\x00' * pad)

    return pad


def write_padded(buffer: OutputBuffer, source_path, padding: int, chunk_size=None) -> int:
    '''Copy the file at the cursor and pad; returns the number of content bytes written.'''
    chunk_size = settings.check_chunk_size(settings.READ_CHUNK_SIZE if chunk_size is None else chunk_size)
    logger.info(f'adding {source_path} into buffer at offset 0x{buffer.position:x}')

    start = buffer.position
    written = 0
    try:
        with Stream(os.fsdecode(source_path)) as stream:
            for data in stream.iter_chunks(chunk_size):
                written += buffer.write(data)
    except IOException:
        # a failed copy leaves the buffer as it was
        buffer.truncate(start)
        raise

    pad = pad_buffer(buffer, padding)
    logger.debug(f'{source_path}: {written} bytes + {pad} bytes of padding')

    return written
