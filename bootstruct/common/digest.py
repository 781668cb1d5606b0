'''
Content identity of the components of a boot image.

The id stored in the header is the SHA-1 of the components taken in a
fixed order, each one followed by its size as a 32-bit little endian
integer; a missing component contributes only a zero size. The usual
order is

    kernel, ramdisk, second, [recovery_dtbo (v1)], [dtb (v2)]

so swapping two components changes the digest.
'''
import hashlib
import logging
import os
import struct

from .. import settings
from ..exceptions import HashMismatchException, IOException, OverflowException
from ..streams import Stream


logger = logging.getLogger(__name__)

DIGEST_SIZE = 20
LENGTH_FORMAT = '<I'
LENGTH_MAX = 0xffffffff


def _check_length(length: int, path=None):
    if length > LENGTH_MAX:
        raise OverflowException(f'\'{path}\' is {length} bytes, it doesn\'t fit in 32 bits')


def _update_length(sha, length: int, path=None):
    _check_length(length, path)
    sha.update(struct.pack(LENGTH_FORMAT, length))


def _update_file(sha, path, chunk_size: int):
    with Stream(os.fsdecode(path)) as stream:
        length = stream.size()
        _check_length(length, path)

        for data in stream.iter_chunks(chunk_size):
            sha.update(data)
        logger.debug('update file %s: %s' % (path, sha.copy().hexdigest()))

    _update_length(sha, length, path)
    logger.debug('update SIZE %s: %s' % (path, sha.copy().hexdigest()))


def digest(inputs, chunk_size=None) -> bytes:
    '''Fold the files (None for an absent component) in the given order.'''
    chunk_size = settings.check_chunk_size(settings.READ_CHUNK_SIZE if chunk_size is None else chunk_size)
    sha = hashlib.sha1()

    for path in inputs:
        if path is None:
            _update_length(sha, 0)
            logger.debug('update null: %s' % sha.copy().hexdigest())
        else:
            _update_file(sha, path, chunk_size)

    return sha.digest()


def hash_file_and_size(*inputs) -> bytes:
    return digest(inputs)


def assert_equal(digest_a: bytes, digest_b: bytes) -> None:
    if bytes(digest_a) != bytes(digest_b):
        logger.error(f'hash verification failed: {digest_a.hex()} != {digest_b.hex()}')
        raise HashMismatchException(f'digest {digest_a.hex()} differs from {digest_b.hex()}')

    logger.debug(f'hash verification passed: {digest_a.hex()}')


def assert_file_equals(path_a, path_b) -> None:
    hash_a = hash_file_and_size(path_a)
    hash_b = hash_file_and_size(path_b)
    logger.info(f'{path_a} hash {hash_a.hex()}, {path_b} hash {hash_b.hex()}')

    assert_equal(hash_a, hash_b)
    logger.info(f'hash verification passed: {hash_a.hex()}')
