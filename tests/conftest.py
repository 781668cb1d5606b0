import struct
import subprocess

import pytest

from bootstruct.exceptions import ExternalToolException
from bootstruct.tools import Cpio, Dtc, KernelExtractor, Mkbootfs


class FakeToolMixin:
    """Record the command lines instead of spawning a process."""

    def __init__(self, available=True, stdout=b'', side_effect=None, returncode=0):
        super().__init__(binary='fake-%s' % self.__class__.__name__.lower())
        self.available = available
        self.stdout = stdout
        self.side_effect = side_effect
        self.returncode = returncode
        self.calls = []

    def is_available(self):
        return self.available

    def run(self, args, cwd=None):
        self.calls.append((list(args), cwd))
        if self.side_effect:
            self.side_effect(args, cwd)
        if self.returncode != 0:
            raise ExternalToolException(
                '\'%s\' exited with status %d' % (self.binary, self.returncode),
                returncode=self.returncode,
                stderr=b'fake failure')
        return subprocess.CompletedProcess([self.binary, *args], 0, stdout=self.stdout, stderr=b'')


class FakeCpio(FakeToolMixin, Cpio):
    pass


class FakeDtc(FakeToolMixin, Dtc):
    pass


class FakeKernelExtractor(FakeToolMixin, KernelExtractor):
    pass


class FakeMkbootfs(FakeToolMixin, Mkbootfs):
    pass


@pytest.fixture
def source_image(tmp_path):
    """4096 bytes where each byte is its offset modulo 256."""
    path = tmp_path / 'source.img'
    path.write_bytes(bytes(_ % 256 for _ in range(4096)))

    return path


@pytest.fixture
def boot_image(tmp_path):
    """Just enough of a boot image to probe the header version."""
    path = tmp_path / 'boot.img'
    header = b'ANDROID!' + b'\x00' * 32 + struct.pack('<I', 2) + b'\x00' * 1580
    path.write_bytes(header)

    return path
