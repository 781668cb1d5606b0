#!/usr/bin/env python3
'''
Cut a component out of a boot image and unpack it.

The offset and the size come from the header of the image, e.g.

 $ unpackslice.py kernel boot.img 0x800 0x8a1f20 build/kernel
 $ unpackslice.py ramdisk boot.img 0x8a2000 0x2f3a1 build/ramdisk.img.gz build/root
 $ unpackslice.py dtb boot.img 0x8d2000 0x1c4e0 build/dtb
'''
import os
import sys
import logging

from bootstruct.enum import ComponentKind
from bootstruct.exceptions import BootStructException
from bootstruct.slice import ComponentSlice, dump, probe_header_version


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    kinds = '|'.join(_.value for _ in ComponentKind if _ != ComponentKind.RAMDISK)
    print(f'''usage: {progname} <{kinds}> <image> <offset> <size> <destination>
       {progname} ramdisk <image> <offset> <size> <destination.gz> <root directory>''')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 6:
        usage(sys.argv[0])

    kind, image, offset, size, destination = sys.argv[1:6]
    extra = sys.argv[6:]

    try:
        kind = ComponentKind(kind)
    except ValueError:
        usage(sys.argv[0])

    # only the ramdisk takes (and needs) the root directory
    kwargs = {}
    if kind == ComponentKind.RAMDISK:
        if len(extra) != 1:
            usage(sys.argv[0])
        kwargs['root'] = extra[0]
    elif extra:
        usage(sys.argv[0])

    try:
        component = ComponentSlice(image, int(offset, 0), int(size, 0), destination)
    except ValueError:
        usage(sys.argv[0])

    try:
        logger.info(f'{image}: header version {probe_header_version(image)}')
        result = dump(kind, component, **kwargs)
    except BootStructException as e:
        logger.error(e)
        sys.exit(1)

    if isinstance(result, list):
        print('\n'.join(result))
    elif result:
        print(result)
