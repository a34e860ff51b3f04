"""
# nbtstruct: the Named Binary Tag format.

A document of this format is a tree of typed values, each node is a tag:

 1. numbers: Byte, Short, Int, Long (signed, 8/16/32/64 bits), Float and Double
 2. arrays of fixed width integers: ByteArray, IntArray, LongArray
 3. String: text encoded as modified UTF-8
 4. List: a sequence of tags all of the same kind
 5. Compound: named tags, the only way to give a name to a tag

Each kind has an 8 bits id (see enum.TagType) and its binary encoding, with
all the integers big-endian and no padding; the End id (zero) is a
sentinel that closes a compound.

Two basic main operations are defined for a tag:

 1. read(): a class method that decodes a payload of its kind from a stream
    and returns a new tag. The kind of a tag is never written by the tag
    itself: the container knows it and dispatches through the registry in
    meta.py.

 2. write(): encode the payload of the tag into the stream.

codec.read() and codec.write() do the same for a whole tree, rooted in a
compound; document.NBTFile handles the framing of a file (named root and
compression).
"""
from .enum import TagType, Compliant
from .exceptions import (
    NBTException,
    InvalidTagType,
    InvalidLength,
    NullOrMissingValue,
    TypeMismatch,
    ValueOutOfRange,
    DepthExceeded,
    DuplicateName,
    TruncatedStream,
)
from .options import CodecOptions, DEFAULT_OPTIONS
from .meta import type_of, id_of, class_for, reader_for
from .streams import Stream
from .fields import (
    Tag,
    EndTag,
    ByteTag,
    ShortTag,
    IntTag,
    LongTag,
    FloatTag,
    DoubleTag,
    StringTag,
    ByteArrayTag,
    IntArrayTag,
    LongArrayTag,
)
from .core import ListTag, CompoundTag
from .codec import read, write, loads, dumps
from .document import NBTFile, Compression, read_named, write_named
