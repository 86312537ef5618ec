import io

import pytest
from PIL import Image

from iconmaker.workers.errors import ImageEncodeError
from iconmaker.workers.ico import build_ico, read_ico_directory
from iconmaker.workers.imaging import encode_png, resample


def test_header_and_directory_layout():
    payloads = [(16, b"a" * 10), (32, b"b" * 20), (48, b"c" * 30)]
    data = build_ico(payloads)

    assert data[:6] == bytes([0x00, 0x00, 0x01, 0x00, 0x03, 0x00])
    assert len(data) == 54 + 60

    entries = read_ico_directory(data)
    assert [e.width for e in entries] == [16, 32, 48]
    assert [e.height for e in entries] == [16, 32, 48]
    assert [e.planes for e in entries] == [1, 1, 1]
    assert [e.bit_count for e in entries] == [32, 32, 32]
    assert [e.length for e in entries] == [10, 20, 30]
    assert [e.offset for e in entries] == [54, 64, 84]
    assert data[54:64] == b"a" * 10
    assert data[84:] == b"c" * 30


def test_directory_entry_bytes():
    data = build_ico([(16, b"x" * 5)])
    entry = data[6:22]
    assert entry == bytes([16, 16, 0, 0, 1, 0, 32, 0, 5, 0, 0, 0, 22, 0, 0, 0])


def test_256_is_stored_as_zero():
    data = build_ico([(256, b"p")])
    assert data[6] == 0 and data[7] == 0
    assert read_ico_directory(data)[0].width == 256


@pytest.mark.parametrize("images", [[], [(257, b"p")], [(0, b"p")]])
def test_invalid_images_rejected(images):
    with pytest.raises(ImageEncodeError):
        build_ico(images)


def test_read_rejects_other_files():
    with pytest.raises(ValueError):
        read_ico_directory(b"\x89PNG\r\n\x1a\n" + b"\x00" * 8)


def test_standard_reader_recognises_container(source):
    images = [(s, encode_png(resample(source, (s, s)))) for s in (16, 32, 48)]
    data = build_ico(images)
    with Image.open(io.BytesIO(data)) as ico:
        assert ico.format == "ICO"
        assert set(ico.info["sizes"]) == {(16, 16), (32, 32), (48, 48)}
