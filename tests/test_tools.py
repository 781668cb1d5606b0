import sys

import pytest

from bootstruct import settings
from bootstruct.exceptions import ExternalToolException
from bootstruct.tools import Cpio, Dtc, ExternalTool, KernelExtractor, Mkbootfs

from conftest import FakeKernelExtractor, FakeMkbootfs


def test_run():
    tool = ExternalTool(sys.executable)

    assert tool.is_available()
    assert tool.run(['-c', 'import sys; sys.stdout.write("kebab")']).stdout == b'kebab'


def test_run_failure():
    tool = ExternalTool(sys.executable)

    with pytest.raises(ExternalToolException) as excinfo:
        tool.run(['-c', 'import sys; sys.stderr.write("boom"); sys.exit(3)'])

    assert excinfo.value.returncode == 3
    assert excinfo.value.stderr == b'boom'


def test_missing_tool():
    tool = ExternalTool('bootstruct-no-such-tool')

    assert not tool.is_available()

    with pytest.raises(ExternalToolException):
        tool.run(['--help'])


def test_default_binaries():
    assert Cpio().binary == settings.CPIO_BIN
    assert Dtc().binary == settings.DTC_BIN
    assert KernelExtractor().binary == settings.KERNEL_EXTRACTOR_BIN
    assert Mkbootfs().binary == settings.MKBOOTFS_BIN
    assert Cpio('/opt/bin/cpio').binary == '/opt/bin/cpio'


def test_kernel_extractor_output(tmp_path):
    extractor = FakeKernelExtractor(stdout=b'lz4\n')

    assert extractor.inspect('kernel', str(tmp_path)) == ['lz4']


def test_mkbootfs_output():
    assert FakeMkbootfs(stdout=b'\x00\x01').archive('root') == b'\x00\x01'
