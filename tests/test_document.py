import gzip
import io
import zlib

import pytest

from nbtstruct import (
    InvalidTagType,
    IntTag,
    StringTag,
    CompoundTag,
    NBTFile,
    Compression,
    read_named,
    write_named,
)
from nbtstruct.document import detect_compression, compress, decompress


HELLO_WORLD = (
    b'\x0a\x00\x0bhello world'
    b'\x08\x00\x04name\x00\x09Bananrama'
    b'\x00'
)


def test_read_named():
    name, root = read_named(io.BytesIO(HELLO_WORLD))

    assert name == 'hello world'
    assert root == CompoundTag({'name': StringTag('Bananrama')})


def test_write_named():
    stream = io.BytesIO()

    write_named(CompoundTag({'name': StringTag('Bananrama')}), stream, name='hello world')

    assert stream.getvalue() == HELLO_WORLD


def test_named_root_must_be_a_compound():
    with pytest.raises(InvalidTagType):
        read_named(io.BytesIO(b'\x03\x00\x00\x00\x00\x00\x01'))


@pytest.mark.parametrize('compression,data', [
    (Compression.NONE, HELLO_WORLD),
    (Compression.GZIP, gzip.compress(HELLO_WORLD)),
    (Compression.ZLIB, zlib.compress(HELLO_WORLD)),
])
def test_detect_compression(compression, data):
    assert detect_compression(data) == compression
    assert decompress(data) == HELLO_WORLD


def test_compress():
    assert compress(HELLO_WORLD, Compression.NONE) == HELLO_WORLD
    assert gzip.decompress(compress(HELLO_WORLD, Compression.GZIP)) == HELLO_WORLD
    assert zlib.decompress(compress(HELLO_WORLD, Compression.ZLIB)) == HELLO_WORLD


def test_nbtfile_from_bytes():
    nbt = NBTFile(gzip.compress(HELLO_WORLD))

    assert nbt.name == 'hello world'
    assert nbt.compression == Compression.GZIP
    assert nbt.root.get_string('name').value == 'Bananrama'


def test_nbtfile_save_and_load(tmp_path):
    root = CompoundTag()
    root.put_compound('Data').put_int('version', 19133)

    path = tmp_path / 'level.dat'
    NBTFile(root=root, name='').save(path)

    assert path.read_bytes()[:2] == b'\x1f\x8b'

    nbt = NBTFile(path)

    assert nbt.name == ''
    assert nbt.compression == Compression.GZIP
    assert nbt.root == root
    assert nbt.root.get_compound('Data').get_int('version') == IntTag(19133)


def test_nbtfile_keeps_compression(tmp_path):
    path = tmp_path / 'plain.nbt'
    path.write_bytes(HELLO_WORLD)

    nbt = NBTFile(str(path))

    assert nbt.compression == Compression.NONE
    assert nbt.pack() == HELLO_WORLD


def test_nbtfile_trailing_data(caplog):
    nbt = NBTFile(HELLO_WORLD + b'\xca\xfe')

    assert nbt.name == 'hello world'
    assert '2 bytes after the end' in caplog.text


def test_nbtfile_corrupted_gzip():
    with pytest.raises(OSError):
        NBTFile(b'\x1f\x8b' + b'\x00' * 16)
