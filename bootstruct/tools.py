'''
External programs the pipeline delegates to.

Each tool only knows how to build its command line; availability and
execution go through ExternalTool so that tests can replace them with
fakes overriding is_available() and run().
'''
import logging
import os
import shutil
import subprocess
from typing import List

from . import settings
from .exceptions import ExternalToolException


logger = logging.getLogger(__name__)


class ExternalTool(object):

    def __init__(self, binary: str):
        self.binary = binary

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.binary})>'

    def is_available(self) -> bool:
        return shutil.which(self.binary) is not None

    def run(self, args: List[str], cwd=None) -> subprocess.CompletedProcess:
        '''Blocking execution with captured output, a non-zero exit raises.'''
        cmdline = [self.binary, *[os.fspath(_) for _ in args]]
        logger.info(' '.join(cmdline))

        try:
            result = subprocess.run(cmdline, cwd=cwd, capture_output=True)
        except OSError as e:
            raise ExternalToolException(f'cannot execute \'{self.binary}\': {e}') from e

        if result.returncode != 0:
            logger.error(f'{self.binary} exited with {result.returncode}: {result.stderr!r}')
            raise ExternalToolException(
                f'\'{self.binary}\' exited with status {result.returncode}',
                returncode=result.returncode,
                stderr=result.stderr)

        return result


class Cpio(ExternalTool):
    '''Archiver of the ramdisk'''

    def __init__(self, binary=None):
        super().__init__(binary or settings.CPIO_BIN)

    def extract(self, archive, directory) -> subprocess.CompletedProcess:
        return self.run(['-i', '-m', '-F', os.path.abspath(archive)], cwd=directory)


class Dtc(ExternalTool):
    '''Device tree compiler, used only to decompile'''

    def __init__(self, binary=None):
        super().__init__(binary or settings.DTC_BIN)

    def decompile(self, dtb, dts) -> subprocess.CompletedProcess:
        return self.run(['-q', '-I', 'dtb', '-O', 'dts', '-o', dts, dtb])


class KernelExtractor(ExternalTool):
    '''Sniffs format, compression and configuration of a kernel image'''

    def __init__(self, binary=None):
        super().__init__(binary or settings.KERNEL_EXTRACTOR_BIN)

    def inspect(self, kernel, output_dir) -> List[str]:
        result = self.run([
            '--input', kernel,
            '--output-configs', os.path.join(output_dir, 'kernel_configs.txt'),
            '--output-version', os.path.join(output_dir, 'kernel_version.txt'),
        ])

        return result.stdout.decode(errors='replace').splitlines()


class Mkbootfs(ExternalTool):
    '''Builds a cpio archive out of a directory, written on stdout'''

    def __init__(self, binary=None):
        super().__init__(binary or settings.MKBOOTFS_BIN)

    def archive(self, root_dir) -> bytes:
        return self.run([root_dir]).stdout
