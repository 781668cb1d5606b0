'''
Extraction of the components of a boot image.

The header layout tells where each component lives (offset and size);
here a ComponentSlice is cut out of the image into its own file and then,
depending on its kind, handed to the external tools

    kernel  -> kernel info extractor (optional)
    ramdisk -> gunzip -> cpio into a directory
    dtb     -> dtc decompilation to <dtb>.src (optional)

The ramdisk directory is always wiped before the unpacking so that
unpacking twice gives the same tree.
'''
import gzip
import logging
import os
import shutil
import struct
from typing import List, NamedTuple, Optional

from .enum import ComponentKind
from .exceptions import (
    ExternalToolException,
    InvalidArgumentException,
    IOException,
)
from .streams import Stream
from .tools import Cpio, Dtc, KernelExtractor, Mkbootfs


logger = logging.getLogger(__name__)

HEADER_VERSION_OFFSET = 40
HEADER_VERSION_FORMAT = '<I'
GZIP_SUFFIX = '.gz'
DTS_SUFFIX = '.src'


class ComponentSlice(NamedTuple):
    source_path: str
    byte_offset: int
    byte_length: int
    destination_path: str


def _remove_partial(path) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning(f'cannot remove partial \'{path}\': {e}')
    else:
        logger.debug(f'removed partial \'{path}\'')


def extract(s: ComponentSlice) -> bytes:
    '''Copy exactly byte_length bytes from byte_offset of the source into the destination.

    A zero length means the component is absent and must not reach this point.
    The destination is not touched when the source is too short and it's
    removed when writing it fails halfway.
    '''
    if s.byte_length == 0:
        raise InvalidArgumentException(f'zero-length slice for \'{s.destination_path}\'')
    if s.byte_offset < 0 or s.byte_length < 0:
        raise InvalidArgumentException(f'invalid slice range ({s.byte_offset}, {s.byte_length})')

    with Stream(os.fsdecode(s.source_path)) as stream:
        size = stream.size()
        end = s.byte_offset + s.byte_length
        if end > size:
            raise IOException(
                f'slice [0x{s.byte_offset:x}, 0x{end:x}) exceeds \'{s.source_path}\' of size 0x{size:x}')

        stream.seek(s.byte_offset)
        data = stream.read_exactly(s.byte_length)

    f = None
    try:
        with open(s.destination_path, 'wb') as f:
            f.write(data)
    except OSError as e:
        if f is not None:
            _remove_partial(s.destination_path)
        raise IOException(f'cannot write \'{s.destination_path}\': {e}') from e

    logger.info(f'extracted {s.byte_length} bytes at 0x{s.byte_offset:x} -> {s.destination_path}')

    return data


def probe_header_version(path) -> int:
    with Stream(os.fsdecode(path)) as stream:
        stream.seek(HEADER_VERSION_OFFSET)
        value, = struct.unpack(HEADER_VERSION_FORMAT, stream.read_exactly(struct.calcsize(HEADER_VERSION_FORMAT)))

    logger.debug(f'{path}: header version {value}')

    return value


def delete_if_exists(path) -> None:
    if not os.path.lexists(path):
        return

    if not os.path.isfile(path):
        raise InvalidArgumentException(f'{os.path.realpath(path)} should be regular file')

    logger.info(f'Deleting {path} ...')
    os.remove(path)


def gunzip_file(src, dst) -> None:
    try:
        with gzip.open(src, 'rb') as fin, open(dst, 'wb') as fout:
            shutil.copyfileobj(fin, fout)
    except (OSError, EOFError) as e:
        raise IOException(f'cannot decompress \'{src}\': {e}') from e


def gzip_file(dst, data: bytes) -> None:
    try:
        with gzip.open(dst, 'wb') as fout:
            fout.write(data)
    except OSError as e:
        raise IOException(f'cannot compress into \'{dst}\': {e}') from e


def unpack_ramdisk(ramdisk, root, cpio: Optional[Cpio] = None) -> None:
    cpio = cpio or Cpio()
    if not cpio.is_available():
        raise ExternalToolException(f'{cpio!r} is required to unpack the ramdisk')

    if os.path.lexists(root):
        logger.info(f'Cleaning [{root}] before ramdisk unpacking')
        if os.path.isdir(root) and not os.path.islink(root):
            shutil.rmtree(root)
        else:
            os.remove(root)
    os.makedirs(root)

    cpio.extract(ramdisk, root)
    logger.info(f' ramdisk extracted : {ramdisk} -> {root}')


def pack_rootfs(root_dir, ramdisk_gz, mkbootfs: Optional[Mkbootfs] = None) -> None:
    mkbootfs = mkbootfs or Mkbootfs()
    logger.info(f'Packing rootfs {root_dir} ...')

    gzip_file(ramdisk_gz, mkbootfs.archive(root_dir))
    logger.info(f'{ramdisk_gz} is ready')


def dump_kernel(s: ComponentSlice, extractor: Optional[KernelExtractor] = None, output_dir=None) -> List[str]:
    extract(s)

    extractor = extractor or KernelExtractor()
    if not extractor.is_available():
        logger.warning(f'{extractor!r} not available, skipping kernel inspection')
        return []

    output_dir = output_dir or os.path.dirname(os.path.abspath(s.destination_path))

    return extractor.inspect(s.destination_path, output_dir)


def dump_ramdisk(s: ComponentSlice, root, cpio: Optional[Cpio] = None) -> str:
    '''Returns the path of the decompressed cpio archive.'''
    destination = os.fsdecode(s.destination_path)
    if not destination.endswith(GZIP_SUFFIX):
        raise InvalidArgumentException(f'ramdisk destination \'{destination}\' must end with {GZIP_SUFFIX}')

    extract(s)

    archive = destination[:-len(GZIP_SUFFIX)]
    gunzip_file(destination, archive)
    unpack_ramdisk(archive, root, cpio=cpio)

    return archive


def dump_dtb(s: ComponentSlice, dtc: Optional[Dtc] = None) -> Optional[str]:
    '''Returns the path of the decompiled source, None if dtc is missing.'''
    extract(s)

    dtc = dtc or Dtc()
    if not dtc.is_available():
        logger.warning(f'{dtc!r} not available, skipping device tree decompilation')
        return None

    dts = os.fsdecode(s.destination_path) + DTS_SUFFIX
    dtc.decompile(s.destination_path, dts)

    return dts


_dumpers = {
    ComponentKind.KERNEL: dump_kernel,
    ComponentKind.RAMDISK: dump_ramdisk,
    ComponentKind.DTB: dump_dtb,
}


def dump(kind: ComponentKind, s: ComponentSlice, *args, **kwargs):
    '''Route the slice to the pipeline of its kind.'''
    try:
        dumper = _dumpers[ComponentKind(kind)]
    except ValueError as e:
        raise InvalidArgumentException(f'unknown component kind \'{kind}\'') from e

    logger.debug(f'dumping {ComponentKind(kind).value} from {s.source_path}')

    return dumper(s, *args, **kwargs)
