'''
Bit packed metadata of the boot header.

For version "A.B.C" and patch level "Y-M-D" the header stores

    ver = A << 14 | B << 7 | C         (7 bits for each of A, B, C)
    lvl = ((Y - 2000) & 127) << 4 | M  (7 bits for Y, 4 bits for M)
    os_version = ver << 11 | lvl

The day of the patch level is not stored: unpacking always gives "00".
'''
import logging
import re

from bitstring import Bits, pack

from .exceptions import InvalidArgumentException


logger = logging.getLogger(__name__)

OS_VERSION_FORMAT = 'uint:7, uint:7, uint:7'
OS_PATCH_LEVEL_FORMAT = 'uint:7, uint:4'
OS_VERSION_FIELD_FORMAT = 'uint:21, uint:11'

OS_VERSION_BITS = 21
OS_PATCH_LEVEL_BITS = 11

_os_version_re = re.compile(r'^(\d{1,3})(?:\.(\d{1,3})(?:\.(\d{1,3}))?)?')
_os_patch_level_re = re.compile(r'^(\d{4})-(\d{2})-(\d{2})')


def _mask(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def pack_os_version(text):
    if text is None or not text.strip():
        return 0

    match = _os_version_re.match(text)
    if not match:
        raise InvalidArgumentException(f'invalid os_version \'{text}\'')

    components = [int(_) if _ is not None else 0 for _ in match.groups()]
    for component in components:
        if component >= 128:
            raise InvalidArgumentException(f'os_version \'{text}\' has component {component} >= 128')

    return pack(OS_VERSION_FORMAT, *components).uint


def unpack_os_version(value: int) -> str:
    '''Only the lower 21 bits are taken into account.'''
    a, b, c = Bits(uint=_mask(value, OS_VERSION_BITS), length=OS_VERSION_BITS).unpack(OS_VERSION_FORMAT)

    return f'{a}.{b}.{c}'


def pack_os_patch_level(text):
    if text is None or not text.strip():
        return 0

    match = _os_patch_level_re.match(text)
    if not match:
        raise InvalidArgumentException(f'invalid os_patch_level \'{text}\'')

    year = int(match.group(1), 10) - 2000
    month = int(match.group(2), 10)
    # 7 bits allocated for the year, 4 bits for the month
    if not 0 <= year <= 127:
        raise InvalidArgumentException(f'os_patch_level \'{text}\' has year out of [2000, 2127]')
    if not 1 <= month <= 12:
        raise InvalidArgumentException(f'os_patch_level \'{text}\' has invalid month {month}')

    return pack(OS_PATCH_LEVEL_FORMAT, year, month).uint


def unpack_os_patch_level(value: int) -> str:
    '''Only the lower 11 bits are taken into account.'''
    year, month = Bits(
        uint=_mask(value, OS_PATCH_LEVEL_BITS),
        length=OS_PATCH_LEVEL_BITS).unpack(OS_PATCH_LEVEL_FORMAT)

    return '%d-%02d-%02d' % (year + 2000, month, 0)


def pack_os_version_field(version, patch_level) -> int:
    '''Build the 32-bit os_version word of the v0-v2 headers.'''
    ver = pack_os_version(version)
    lvl = pack_os_patch_level(patch_level)
    logger.debug(f'os_version word from ver=0x{ver:x} lvl=0x{lvl:x}')

    return pack(OS_VERSION_FIELD_FORMAT, ver, lvl).uint


def unpack_os_version_field(value: int):
    '''Returns the couple (os_version, os_patch_level) as strings.'''
    ver, lvl = Bits(uint=_mask(value, 32), length=32).unpack(OS_VERSION_FIELD_FORMAT)

    return unpack_os_version(ver), unpack_os_patch_level(lvl)
