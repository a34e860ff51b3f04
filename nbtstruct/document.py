'''
# Documents

A complete document is framed around the tree: the type id of the root
(always a compound), the name of the root as a string and then the
compound payload:

    .--------------------------.
    | 0x0a                     |
    | uint16 length + name     |
    | compound entries ... 0x00|
    '--------------------------'

Files are usually compressed as a whole, with gzip or with zlib; the
codec works only on the decompressed bytes so the compression is
handled here.
'''
import gzip
import logging
import os
import zlib
from enum import Enum
from typing import Tuple

from .core import CompoundTag
from .enum import TagType
from .exceptions import InvalidTagType
from .fields import read_string, write_string
from .meta import id_of, type_of
from .options import DEFAULT_OPTIONS, CodecOptions
from .streams import Stream
from . import codec


logger = logging.getLogger(__name__)

GZIP_MAGIC = b'\x1f\x8b'
ZLIB_MAGIC = 0x78


class Compression(Enum):
    NONE = 0
    GZIP = 1
    ZLIB = 2


def detect_compression(data: bytes) -> Compression:
    '''Guess from the first bytes: an uncompressed document starts with 0x0a'''
    if data[:2] == GZIP_MAGIC:
        return Compression.GZIP
    if data[:1] and data[0] == ZLIB_MAGIC:
        return Compression.ZLIB

    return Compression.NONE


def compress(data: bytes, compression: Compression) -> bytes:
    if compression == Compression.GZIP:
        return gzip.compress(data, mtime=0)
    if compression == Compression.ZLIB:
        return zlib.compress(data)

    return data


def decompress(data: bytes, compression: Compression = None) -> bytes:
    compression = compression or detect_compression(data)
    logger.debug('decompressing %d bytes as %s', len(data), compression.name)

    if compression == Compression.GZIP:
        return gzip.decompress(data)
    if compression == Compression.ZLIB:
        return zlib.decompress(data)

    return data


def read_named(stream, options: CodecOptions = None) -> Tuple[str, CompoundTag]:
    '''Read the named root of a document, returns its name and the tree'''
    stream = Stream.wrap(stream)

    tag_type = type_of(stream.unpack('>B'))
    if tag_type != TagType.COMPOUND:
        raise InvalidTagType(f'the root of a document must be a compound, found {tag_type.name}')

    name = read_string(stream)
    logger.debug('reading document named \'%s\'', name)

    return name, codec.read(stream, options)


def write_named(tree: CompoundTag, stream, name: str = '', options: CodecOptions = None) -> None:
    stream = Stream.wrap(stream)

    stream.pack('>B', id_of(TagType.COMPOUND))
    write_string(stream, name)
    codec.write(tree, stream, options)


class NBTFile(object):
    '''A document on disk (or in memory): name, root compound and the
    compression of the file.

    Passing filepath, a path or the raw bytes of a document, unpacks it at
    construction time, with the compression detected if not indicated.

        >>> nbt = NBTFile('level.dat')
        >>> nbt.root.get_compound('Data').get_string('LevelName')
    '''

    def __init__(self, filepath=None, root=None, name='', compression=None, options=None):
        self.logger = logging.getLogger(f'{self.__module__}.{self.__class__.__name__}')
        self.name = name
        self.root = root if root is not None else CompoundTag()
        self.compression = compression
        self.options = options or DEFAULT_OPTIONS

        if isinstance(filepath, (bytes, bytearray)):
            self.unpack(bytes(filepath))
        elif filepath is not None:
            self.load(filepath)

    def __repr__(self):
        return f'<{self.__class__.__name__}(name={self.name!r}, root={self.root!r})>'

    def load(self, filepath) -> None:
        filepath = os.fspath(filepath)
        self.logger.debug('unpacking \'%s\'', filepath)

        with open(filepath, 'rb') as f:
            self.unpack(f.read())

    def unpack(self, data: bytes) -> None:
        if self.compression is None:
            self.compression = detect_compression(data)

        stream = Stream(decompress(data, self.compression))
        self.name, self.root = read_named(stream, self.options)

        leftover = stream.read_all()
        if leftover:
            self.logger.warning('%d bytes after the end of the document are ignored', len(leftover))

    def pack(self) -> bytes:
        stream = Stream(b'')
        write_named(self.root, stream, self.name, self.options)

        return compress(stream.getvalue(), self.compression or Compression.GZIP)

    def save(self, filepath) -> None:
        filepath = os.fspath(filepath)
        self.logger.debug('packing document into \'%s\'', filepath)

        data = self.pack()
        with open(filepath, 'wb') as f:
            f.write(data)
