import pytest

from bootstruct.exceptions import InvalidArgumentException
from bootstruct.version import (
    pack_os_patch_level,
    pack_os_version,
    pack_os_version_field,
    unpack_os_patch_level,
    unpack_os_version,
    unpack_os_version_field,
)


def test_os_version():
    assert pack_os_version('1.2.3') == (1 << 14) | (2 << 7) | 3
    assert unpack_os_version(pack_os_version('1.2.3')) == '1.2.3'
    assert unpack_os_version(pack_os_version('127.127.127')) == '127.127.127'


def test_os_version_missing_components():
    assert pack_os_version(None) == 0
    assert pack_os_version('') == 0
    assert pack_os_version('   ') == 0

    assert unpack_os_version(pack_os_version('11')) == '11.0.0'
    assert unpack_os_version(pack_os_version('9.1')) == '9.1.0'


def test_os_version_trailing_garbage():
    """Only the leading match counts."""
    assert pack_os_version('10.0.0-beta') == pack_os_version('10.0.0')
    assert pack_os_version('12.1.') == pack_os_version('12.1.0')


@pytest.mark.parametrize('text', ['200.0.0', '1.128.0', '1.2.128', 'R', 'v1.2.3', '.1'])
def test_os_version_invalid(text):
    with pytest.raises(InvalidArgumentException):
        pack_os_version(text)


def test_unpack_os_version_ignores_high_bits():
    assert unpack_os_version((1 << 21) | pack_os_version('4.5.6')) == '4.5.6'


def test_os_patch_level():
    """The day is dropped and always comes back as 00."""
    assert pack_os_patch_level('2023-11-15') == (23 << 4) | 11
    assert unpack_os_patch_level(pack_os_patch_level('2023-11-15')) == '2023-11-00'
    assert unpack_os_patch_level(pack_os_patch_level('2000-01-01')) == '2000-01-00'
    assert unpack_os_patch_level(pack_os_patch_level('2127-12-31')) == '2127-12-00'
    assert pack_os_patch_level(None) == 0
    assert pack_os_patch_level('') == 0


@pytest.mark.parametrize('text', ['1999-01-01', '2128-01-01', '2020-00-01', '2020-13-01', '2020-1-1', '2020-05'])
def test_os_patch_level_invalid(text):
    with pytest.raises(InvalidArgumentException):
        pack_os_patch_level(text)


def test_os_version_field():
    value = pack_os_version_field('11.0.0', '2021-06-05')

    assert value == (pack_os_version('11.0.0') << 11) | pack_os_patch_level('2021-06-05')
    assert unpack_os_version_field(value) == ('11.0.0', '2021-06-00')
    assert pack_os_version_field(None, None) == 0
