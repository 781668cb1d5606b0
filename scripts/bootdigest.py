#!/usr/bin/env python3
'''
Print the id of a set of boot image components, use "-" for a missing one.

The order matters, usually it's kernel, ramdisk, second, dtb.
'''
import os
import sys
import logging

from bootstruct.common.digest import digest
from bootstruct.exceptions import BootStructException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print('usage: %s <file|-> [<file|-> ...]' % progname)
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    paths = [None if _ == '-' else _ for _ in sys.argv[1:]]

    try:
        value = digest(paths)
    except BootStructException as e:
        logger.error(e)
        sys.exit(1)

    print(value.hex())
