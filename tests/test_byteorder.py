import pytest

from sysvtool.byteorder import addr3, be32, swap_hword, swap_word


def test_swap_word():
    assert swap_word(0x12345678) == 0x78563412
    assert swap_word(0xFD187E20) == 0x207E18FD


def test_swap_hword():
    assert swap_hword(0x1234) == 0x3412
    assert swap_hword(0x00FF) == 0xFF00


@pytest.mark.parametrize("value", [0, 1, 0xFF, 0x80000000, 0xDEADBEEF, 0xFFFFFFFF])
def test_swap_word_is_self_inverse(value):
    assert swap_word(swap_word(value)) == value


@pytest.mark.parametrize("value", [0, 1, 0x7F00, 0xABCD, 0xFFFF])
def test_swap_hword_is_self_inverse(value):
    assert swap_hword(swap_hword(value)) == value


def test_be32():
    buf = bytes([0x00, 0x12, 0x34, 0x56, 0x78])
    assert be32(buf, 1) == 0x12345678
    # same as swapping the host (little-endian) view
    assert be32(buf, 1) == swap_word(int.from_bytes(buf[1:5], "little"))


def test_addr3():
    buf = bytes([0xAA, 0x01, 0x02, 0x03])
    assert addr3(buf, 1) == 0x010203
